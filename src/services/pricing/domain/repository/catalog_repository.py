from abc import ABC, abstractmethod

from services.pricing.domain.enum import ResourceType
from services.pricing.domain.value_object import CatalogEntry


class CatalogRepository(ABC):
    """カタログ（読み取り専用）のレポジトリのインターフェース"""

    @abstractmethod
    def find(self, resource_type: ResourceType, resource_id: str) -> CatalogEntry | None:
        """種別と ID でカタログエントリを検索する（非公開のエントリは返さない）"""
        raise NotImplementedError
