from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ActorRole(str, Enum):
    """操作者のロール（認可レイヤーから渡される）"""

    GUEST = "guest"
    STAFF = "staff"


@dataclass(frozen=True)
class ActingContext:
    """操作者のコンテキスト

    アンビエントな「現在のユーザー」には頼らず、
    必要なサービス呼び出しへ明示的に引き渡す。
    """

    actor: str
    role: ActorRole = ActorRole.GUEST

    @property
    def is_staff(self) -> bool:
        return self.role == ActorRole.STAFF

    @classmethod
    def from_authorizer(cls, authorizer: dict | None) -> ActingContext:
        """API Gateway の authorizer コンテキストから生成する"""
        authorizer = authorizer or {}
        try:
            role = ActorRole(authorizer.get("role", ActorRole.GUEST.value))
        except ValueError:
            role = ActorRole.GUEST
        return cls(actor=authorizer.get("actor") or "anonymous", role=role)
