from sqlalchemy import select

from storefront.data.models.user import UserModel
from storefront.repos.base import BaseRepo


class UserRepo(BaseRepo):
    def get_by_subject(self, subject_id: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.subject_id == subject_id)
        ).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
