from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
import uuid


def utcnow() -> datetime:
    """目前 UTC 時間（naive），與資料庫 DateTime 欄位一致"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_entity_id() -> str:
    """產生新的實體唯一識別符"""
    return str(uuid.uuid4())


class DomainBaseModel(BaseModel):
    """所有領域模型的基類"""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        validate_assignment=True,
    )


class Entity(DomainBaseModel):
    """實體基類，具有唯一標識符

    尚未持久化的實體 id 為 None，由儲存庫在寫入時指派。
    """

    id: Optional[str] = Field(None, description="實體唯一識別符")


class AuditableEntity(Entity):
    """可審計實體，包含創建和修改時間戳"""

    created_at: Optional[datetime] = Field(None, description="創建時間")
    updated_at: Optional[datetime] = Field(None, description="最後更新時間")


class ValueObject(DomainBaseModel):
    """值對象基類，不可變且通過其屬性值來定義相等性"""

    model_config = ConfigDict(frozen=True)
