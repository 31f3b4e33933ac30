from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_by_user(self, user_id: int) -> list[AddressModel]:
        stmt = select(AddressModel).where(AddressModel.user_id == user_id).order_by(AddressModel.id)
        return list(self.db.execute(stmt).scalars().all())

    def get_address(self, address_id: int) -> AddressModel | None:
        return self.db.get(AddressModel, address_id)

    def create_address(self, address: AddressModel) -> AddressModel:
        self.db.add(address)
        self.db.commit()
        self.db.refresh(address)
        return address
