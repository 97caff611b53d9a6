"""intendhooks 异常体系

MalformedEventError 对应入站事件格式错误（HTTP 400），
StoreError 系列包装底层存储错误（HTTP 500），消息中包含集合名与操作。
未找到任务不走异常，见 models.task.TaskNotFound。
"""


class IntendHooksError(Exception):
    """intendhooks 基础异常"""


class MalformedEventError(IntendHooksError):
    """入站事件无法解码：缺少/非法 eventKey，或已识别事件的 payload 字段缺失"""


class StoreError(IntendHooksError):
    """文档存储操作失败"""

    operation_label = "access document"

    def __init__(self, collection: str, original_error: Exception) -> None:
        """
        Args:
            collection: 出错的集合名（tasks / users）
            original_error: 原始异常
        """
        super().__init__(
            f"Failed to {self.operation_label} in '{collection}': {original_error}"
        )
        self.collection = collection
        self.original_error = original_error


class StoreReadError(StoreError):
    """按 id 读取文档失败"""

    operation_label = "get document"


class StoreWriteError(StoreError):
    """upsert 文档失败"""

    operation_label = "update document"


class StoreQueryError(StoreError):
    """条件查询失败（包括收集结果阶段）"""

    operation_label = "query documents"
