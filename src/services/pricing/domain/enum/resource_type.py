from enum import Enum


class ResourceType(str, Enum):
    """予約対象の種別"""

    ROOM = "room"
    EVENT_SPACE = "event_space"
    TABLE = "table"
    SPA = "spa"
    EXPERIENCE = "experience"
    TRANSFER = "transfer"
    ROOM_SERVICE = "room_service"

    @property
    def key_prefix(self) -> str:
        """永続化キーのプレフィックス（種別ごとのコレクション）"""
        return self.value.upper()
