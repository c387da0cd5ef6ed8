"""
衛星領域 DTO（資料傳輸物件）
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class TLEEntry(BaseModel):
    """建立衛星的資料傳輸物件（名稱 + TLE 兩行）"""

    name: str = Field(..., description="衛星名稱")
    line_one: str = Field(..., description="TLE 第一行")
    line_two: str = Field(..., description="TLE 第二行")


class SatellitePatch(BaseModel):
    """更新衛星的資料傳輸物件

    只列出可變欄位；未提供的欄位保持不變。
    提供任一 TLE 行時，服務會以合併後的兩行重新推導軌道狀態。
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, description="衛星名稱")
    line_one: Optional[str] = Field(default=None, description="TLE 第一行")
    line_two: Optional[str] = Field(default=None, description="TLE 第二行")

    @property
    def touches_tle(self) -> bool:
        """此更新是否包含 TLE 欄位"""
        return bool({"line_one", "line_two"} & self.model_fields_set)

    def is_empty(self) -> bool:
        return not self.model_fields_set


class BulkCreateSummary(BaseModel):
    """批量建立結果摘要"""

    created: int = Field(..., description="建立的衛星數量")
    ids: List[str] = Field(default_factory=list, description="建立的衛星 ID（與輸入順序一致）")


class TLECatalogUpload(BaseModel):
    """CelesTrak 三行格式的 TLE 目錄文字"""

    catalog: str = Field(..., description="TLE 目錄文字（名稱、第一行、第二行）")
