from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.user import UserModel
from storefront.domain.errors import StoreFailure
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def resolve(self, subject_id: str, email: str | None) -> UserModel:
        """
        Znajdź użytkownika po subject_id albo utwórz go z pustym koszykiem.
        Idempotentne - kluczem jest subject_id, nie email.
        """
        existing = self.repo.get_by_subject(subject_id)
        if existing:
            return existing

        user = UserModel(subject_id=subject_id, email=email, cart=CartModel(version=1))
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            # równoległe żądanie utworzyło użytkownika pierwsze
            self.repo.rollback()
            winner = self.repo.get_by_subject(subject_id)
            if winner is None:
                raise StoreFailure("Could not create user")
            return winner

        logger.info(f"Created user {created.id} for subject {subject_id}")
        return created
