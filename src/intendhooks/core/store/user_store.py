"""UserStore -- users 集合的类型化访问，文档 id 即 username"""

from collections.abc import Sequence

from ..models.enums import Collection
from ..models.user import User
from .protocols import DocumentStore


class UserStore:
    """users 集合"""

    collection = Collection.USERS.value

    def __init__(self, documents: DocumentStore) -> None:
        self._documents = documents

    async def get_user(self, username: str) -> User | None:
        doc = await self._documents.get(self.collection, username)
        if doc is None:
            return None
        return User.model_validate(doc)

    async def upsert_user(self, user: User, fields: Sequence[str]) -> User:
        """按字段列表写入用户，返回写入后的完整用户"""
        doc = await self._documents.upsert(
            self.collection,
            user.id,
            user.model_dump(),
            fields,
        )
        return User.model_validate(doc)
