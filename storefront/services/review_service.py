# storefront/services/review_service.py
from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewModel, ReviewHelpfulModel
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.review_repo import ReviewRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ReviewService:
    def __init__(self, db: Session):
        self.repo = ReviewRepo(db)
        self.catalog = CatalogRepo(db)

    def list_reviews(self, product_id: int) -> list[ReviewModel]:
        return self.repo.list_by_product(product_id)

    def add_review(self, user_id: int, product_id: int, rating: int, comment: str | None = None) -> ReviewModel:
        if not 1 <= rating <= 5:
            raise ValidationError("Rating must be between 1 and 5")

        if not self.catalog.get_product(product_id):
            raise NotFoundError("Product not found")

        review = self.repo.add_review(
            ReviewModel(user_id=user_id, product_id=product_id, rating=rating, comment=comment or None)
        )
        logger.info(f"Review {review.id} added to product {product_id} by user {user_id}")
        return review

    def mark_helpful(self, review_id: int, user_id: int, is_helpful: bool) -> ReviewModel:
        """
        One vote per user and review; voting again replaces the previous vote.
        helpful_count is recomputed from the votes.
        """
        review = self.repo.get_review(review_id)
        if not review:
            raise NotFoundError("Review not found")

        vote = self.repo.get_vote(review_id, user_id)
        if vote:
            vote.is_helpful = is_helpful
        else:
            vote = ReviewHelpfulModel(review_id=review_id, user_id=user_id, is_helpful=is_helpful)
        self.repo.save_vote(vote)

        review.helpful_count = self.repo.count_helpful(review_id)
        self.repo.commit()
        return review
