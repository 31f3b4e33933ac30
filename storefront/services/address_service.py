from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import AddressCreate
from storefront.repos.address_repo import AddressRepo
from storefront.repos.user_repo import UserRepo


class AddressService:
    def __init__(self, db: Session):
        self.repo = AddressRepo(db)
        self.users = UserRepo(db)

    def list_addresses(self, user_id: int) -> list[AddressModel]:
        return self.repo.list_by_user(user_id)

    def create_address(self, payload: AddressCreate) -> AddressModel:
        if not self.users.get_user(payload.user_id):
            raise NotFoundError("User not found")
        return self.repo.create_address(AddressModel(**payload.model_dump()))
