"""
路线指南仓储接口 - 定义地点查询与留言登记的抽象接口
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Sequence
from .entity import Feature, Point, RouteNote


class FeatureRepository(ABC):
    """地点仓储抽象接口 - 启动时加载，之后只读"""

    @abstractmethod
    def list_all(self) -> Sequence[Feature]:
        """按存储顺序返回全部地点"""
        pass

    @abstractmethod
    def find_by_location(self, point: Point) -> Optional[Feature]:
        """根据坐标精确查找地点"""
        pass


class RouteNoteRepository(ABC):
    """路线留言仓储抽象接口 - 每个坐标一条只追加的有序日志"""

    @abstractmethod
    async def replay_and_append(self, note: RouteNote) -> List[RouteNote]:
        """在同一临界区内返回该坐标此前的全部留言，并追加新留言

        追加发生在回放之前：调用方在回放途中被取消时，其留言仍保留在日志中。
        """
        pass

    @abstractmethod
    async def notes_at(self, point: Point) -> List[RouteNote]:
        """返回该坐标当前留言的快照"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """统计留言总数"""
        pass
