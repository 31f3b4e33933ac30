from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewModel, ReviewHelpfulModel


class ReviewRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_by_product(self, product_id: int) -> list[ReviewModel]:
        stmt = (
            select(ReviewModel)
            .where(ReviewModel.product_id == product_id)
            .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_review(self, review_id: int) -> ReviewModel | None:
        return self.db.get(ReviewModel, review_id)

    def add_review(self, review: ReviewModel) -> ReviewModel:
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        return review

    def get_vote(self, review_id: int, user_id: int) -> ReviewHelpfulModel | None:
        return self.db.execute(
            select(ReviewHelpfulModel).where(
                ReviewHelpfulModel.review_id == review_id,
                ReviewHelpfulModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def save_vote(self, vote: ReviewHelpfulModel) -> ReviewHelpfulModel:
        self.db.add(vote)
        self.db.flush()
        return vote

    def count_helpful(self, review_id: int) -> int:
        return self.db.execute(
            select(func.count(ReviewHelpfulModel.id)).where(
                ReviewHelpfulModel.review_id == review_id,
                ReviewHelpfulModel.is_helpful.is_(True),
            )
        ).scalar_one()

    def commit(self):
        self.db.commit()
