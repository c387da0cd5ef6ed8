"""
共享領域模組

包含所有領域共用的模型與工具。
"""

from satcat.domains.common.models.base_model import (
    DomainBaseModel,
    Entity,
    AuditableEntity,
    ValueObject,
    new_entity_id,
    utcnow,
)
