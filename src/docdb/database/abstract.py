from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type

from pydantic import BaseModel

Document = Dict[str, Any]


class DocumentStore(ABC):
    """Abstract base class for collection-level document access"""

    @abstractmethod
    def save(self, collection: str, document: Mapping[str, Any], **kwargs) -> str:
        """Insert one document and return its id as a string"""
        pass

    @abstractmethod
    def save_multiple(self, collection: str, documents: Sequence[Mapping[str, Any]], **kwargs) -> List[str]:
        """Insert documents in order and return their ids in the same order"""
        pass

    @abstractmethod
    def get_item(
        self,
        collection: str,
        filter: Mapping[str, Any],
        excluded_fields: Optional[Mapping[str, Any]] = None,
        model: Optional[Type[BaseModel]] = None,
        **kwargs
    ) -> Any:
        """Fetch the first document matching filter"""
        pass

    @abstractmethod
    def get_items(
        self,
        collection: str,
        filter: Mapping[str, Any],
        limit: int = 0,
        excluded_fields: Optional[Mapping[str, Any]] = None,
        sort: Optional[Mapping[str, int]] = None,
        model: Optional[Type[BaseModel]] = None,
        **kwargs
    ) -> List[Any]:
        """Fetch documents matching filter"""
        pass

    @abstractmethod
    def count_items(self, collection: str, filter: Mapping[str, Any], **kwargs) -> int:
        """Count documents matching filter"""
        pass

    @abstractmethod
    def update_item(self, collection: str, match: Mapping[str, Any], update: Mapping[str, Any], **kwargs) -> int:
        """Update the first matching document and return the modified count"""
        pass

    @abstractmethod
    def update_items(self, collection: str, match: Mapping[str, Any], update: Mapping[str, Any], **kwargs) -> int:
        """Update every matching document and return the modified count"""
        pass

    @abstractmethod
    def delete_item(self, collection: str, filter: Mapping[str, Any], **kwargs) -> int:
        """Delete the first matching document and return the deleted count"""
        pass

    @abstractmethod
    def delete_items(self, collection: str, filter: Mapping[str, Any], **kwargs) -> int:
        """Delete every matching document and return the deleted count"""
        pass
