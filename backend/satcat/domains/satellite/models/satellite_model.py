from typing import Optional, Dict, Any
from datetime import datetime
from pydantic import Field as PydanticField, field_validator
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON, String

from satcat.domains.common.models.base_model import (
    AuditableEntity,
    ValueObject,
    new_entity_id,
)

TLE_LINE_LENGTH = 69


class TLEPair(ValueObject):
    """TLE (Two-Line Element) 資料，兩行必須一起更新"""

    line_one: str = PydanticField(..., description="TLE 第一行")
    line_two: str = PydanticField(..., description="TLE 第二行")


class OrbitalState(ValueObject):
    """由 TLE 推導出的 SGP4 軌道狀態 (satrec)

    只能由 derive_orbital_state 產生，保存後可直接用於軌道傳播，
    不需要重新解析 TLE 文字。
    """

    satnum: str = PydanticField(..., description="衛星編號")
    classification: str = PydanticField("U", description="機密等級")
    intldesg: str = PydanticField("", description="國際指定標識符")
    epochyr: int = PydanticField(..., description="曆元年份")
    epochdays: float = PydanticField(..., description="曆元年積日")
    ndot: float = PydanticField(..., description="平均運動一階導數")
    nddot: float = PydanticField(..., description="平均運動二階導數")
    bstar: float = PydanticField(..., description="B* 阻力項")
    inclo: float = PydanticField(..., description="軌道傾角（弧度）")
    nodeo: float = PydanticField(..., description="升交點赤經（弧度）")
    ecco: float = PydanticField(..., description="偏心率")
    argpo: float = PydanticField(..., description="近地點幅角（弧度）")
    mo: float = PydanticField(..., description="平近點角（弧度）")
    no_kozai: float = PydanticField(..., description="平均運動（弧度/分鐘）")
    a: float = PydanticField(..., description="半長軸（地球半徑）")
    alta: float = PydanticField(..., description="遠地點高度（地球半徑）")
    altp: float = PydanticField(..., description="近地點高度（地球半徑）")
    method: str = PydanticField(..., description="SGP4 模式：n 近地 / d 深空")


class SatelliteRecord(AuditableEntity):
    """衛星記錄：TLE 與其推導出的軌道狀態"""

    name: str = PydanticField(..., min_length=1, description="衛星名稱")
    tle: TLEPair = PydanticField(..., description="TLE 資料")
    orbital_state: OrbitalState = PydanticField(..., description="軌道狀態快取")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value


class SatelliteTable(SQLModel, table=True):
    """衛星記錄的資料表模型"""

    __tablename__ = "satellite_record"

    id: str = Field(
        default_factory=new_entity_id,
        sa_column=Column(String(36), primary_key=True),
        description="主鍵 ID",
    )
    name: str = Field(index=True, description="衛星名稱")
    tle_line_one: str = Field(description="TLE 第一行")
    tle_line_two: str = Field(description="TLE 第二行")
    satrec: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
        description="軌道狀態 JSON",
    )
    created_at: Optional[datetime] = Field(default=None, description="創建時間")
    updated_at: Optional[datetime] = Field(default=None, description="最後更新時間")

    @classmethod
    def from_record(cls, record: SatelliteRecord) -> "SatelliteTable":
        """從領域記錄建立資料表列，id 為 None 時由預設值產生"""
        values = {
            "name": record.name,
            "tle_line_one": record.tle.line_one,
            "tle_line_two": record.tle.line_two,
            "satrec": record.orbital_state.model_dump(),
            "created_at": record.created_at,
            "updated_at": record.updated_at,
        }
        if record.id is not None:
            values["id"] = record.id
        return cls(**values)

    def apply_record(self, record: SatelliteRecord) -> None:
        """將領域記錄的可變欄位寫回此列"""
        self.name = record.name
        self.tle_line_one = record.tle.line_one
        self.tle_line_two = record.tle.line_two
        self.satrec = record.orbital_state.model_dump()
        self.updated_at = record.updated_at

    def to_record(self) -> SatelliteRecord:
        """轉換為領域記錄"""
        return SatelliteRecord(
            id=self.id,
            name=self.name,
            tle=TLEPair(line_one=self.tle_line_one, line_two=self.tle_line_two),
            orbital_state=OrbitalState.model_validate(self.satrec),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
