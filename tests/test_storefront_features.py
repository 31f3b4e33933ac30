import pytest

from storefront.data.models.user import UserModel
from storefront.domain.errors import ConflictError, NotFoundError, ValidationError
from storefront.domain.schemas import UserCreate
from storefront.services.catalog_service import CatalogService
from storefront.services.chat_service import ChatService
from storefront.services.favorite_service import FavoriteService
from storefront.services.notification_service import NotificationService, send_notification_task
from storefront.services.review_service import ReviewService
from storefront.services.user_service import UserService


def test_password_is_hashed(db, user):
    stored = db.get(UserModel, user.id)

    assert stored.password_hash != "Lavanda123"
    assert stored.password_hash.startswith("$pbkdf2-sha256$")


def test_register_normalizes_email(db):
    svc = UserService(db)
    svc.register(UserCreate(name="Eva", email="Eva@TiendaMistica.mx", password="Jabones123"))

    assert svc.login("eva@tiendamistica.mx", "Jabones123").name == "Eva"
    with pytest.raises(ConflictError):
        svc.register(UserCreate(name="Eva", email="eva@tiendamistica.mx", password="Jabones123"))


def test_featured_products(db):
    assert [p.id for p in CatalogService(db).featured_products()] == [1, 2, 3, 4]


def test_product_detail_includes_reviews(db, user):
    ReviewService(db).add_review(user.id, 2, 5, "Huele delicioso")

    detail = CatalogService(db).get_product(2)

    assert detail["name"] == "Jabón Artesanal Miel"
    assert [r.rating for r in detail["reviews"]] == [5]
    with pytest.raises(NotFoundError):
        CatalogService(db).get_category(77)


def test_favorites_are_idempotent(db, user):
    svc = FavoriteService(db)

    first = svc.add_favorite(user.id, 1)
    second = svc.add_favorite(user.id, 1)

    assert first.id == second.id
    assert len(svc.list_favorites(user.id)) == 1
    assert svc.remove_favorite(user.id, 1) is True
    assert svc.list_favorites(user.id) == []


def test_review_rating_bounds(db, user):
    svc = ReviewService(db)

    with pytest.raises(ValidationError):
        svc.add_review(user.id, 1, 6)
    with pytest.raises(NotFoundError):
        svc.add_review(user.id, 404, 4)


def test_helpful_votes_one_per_user(db, user, other_user):
    svc = ReviewService(db)
    review = svc.add_review(user.id, 1, 4, "Muy buena")

    svc.mark_helpful(review.id, other_user.id, True)
    svc.mark_helpful(review.id, user.id, True)
    assert svc.mark_helpful(review.id, other_user.id, True).helpful_count == 2
    assert svc.mark_helpful(review.id, other_user.id, False).helpful_count == 1


def test_notifications_read_state(db, user):
    svc = NotificationService(db)
    first = svc.create(user.id, "Hola", "Bienvenida a la tienda")
    svc.create(user.id, "Promo", "VERANO25 disponible", type="promotion")

    svc.mark_read(first.id)
    assert [n.title for n in svc.list_notifications(user.id, unread_only=True)] == ["Promo"]
    assert svc.mark_all_read(user.id) == 1
    with pytest.raises(NotFoundError):
        svc.mark_read(999)


def test_notification_task_runs_eagerly():
    result = send_notification_task.delay(1, 2, "Order received")

    assert result.get() == {"notification_id": 1, "user_id": 2, "status": "sent"}


def test_chat_session_lifecycle(db, user):
    svc = ChatService(db)
    session = svc.create_session(user.id)

    svc.add_message(session.id, "user", "¿Tienen velas de vainilla?")
    svc.add_message(session.id, "agent", "Por ahora solo lavanda")
    assert [m.sender for m in svc.list_messages(session.id)] == ["user", "agent"]

    svc.update_session(session.id, "closed")
    with pytest.raises(ConflictError):
        svc.add_message(session.id, "user", "Gracias")
    assert [s.id for s in svc.list_sessions(user.id)] == [session.id]
    with pytest.raises(NotFoundError):
        svc.list_messages(999)
