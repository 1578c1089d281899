# storefront/repos/order_repo.py
from typing import Any, Dict, List

from sqlalchemy import func, select, update

from storefront.data.models.order import OrderModel
from storefront.repos.base import BaseRepo


class OrderRepo(BaseRepo):
    def get_user_order(self, user_id: int, order_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.id == order_id, OrderModel.user_id == user_id)
        ).scalar_one_or_none()

    def list_user_orders(self, user_id: int) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel).where(OrderModel.user_id == user_id).order_by(OrderModel.position)
            ).scalars()
        )

    def next_position(self, user_id: int) -> int:
        current = self.db.execute(
            select(func.max(OrderModel.position)).where(OrderModel.user_id == user_id)
        ).scalar()
        return (current or 0) + 1

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        return order

    def delete_order(self, order: OrderModel) -> None:
        self.db.delete(order)

    def update_order_version(self, order_id: str, old_version: int, new_data: Dict[str, Any]) -> int:
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.version == old_version)
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
