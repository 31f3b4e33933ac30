# storefront/data/seed.py
from datetime import datetime, timezone, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.models.catalog import CategoryModel, ProductModel, ProductGalleryModel
from storefront.data.models.coupon import CouponModel
from storefront.repos.catalog_repo import CatalogRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CATEGORIES = [
    (1, "Velas", "Velas aromáticas artesanales"),
    (2, "Jabones", "Jabones naturales hechos a mano"),
    (3, "Libretas", "Libretas artesanales de cuero"),
    (4, "Inciensos", "Inciensos aromáticos para meditación"),
]

PRODUCTS = [
    {
        "id": 1, "category_id": 1, "name": "Vela Aromática Lavanda",
        "description": "Relajante aroma de lavanda natural", "price": Decimal("15.00"), "stock": 50,
        "recipe": "Cera de soja natural, aceite esencial de lavanda búlgara, mecha de algodón orgánico",
        "magical_properties": "La lavanda es conocida por sus propiedades calmantes y purificadoras.",
    },
    {
        "id": 2, "category_id": 2, "name": "Jabón Artesanal Miel",
        "description": "Con ingredientes naturales y miel pura", "price": Decimal("12.00"), "stock": 30,
        "recipe": "Aceite de coco, aceite de oliva, miel orgánica, manteca de karité",
        "magical_properties": "La miel atrae la abundancia y dulzura a tu vida.",
    },
    {
        "id": 3, "category_id": 3, "name": "Libreta Místico Dreams",
        "description": "Cuero artesanal con páginas recicladas", "price": Decimal("45.00"), "stock": 20,
        "recipe": "Cuero genuino, papel reciclado, hilo encerado",
        "magical_properties": "Perfecta para escribir tus intenciones y manifestaciones.",
    },
    {
        "id": 4, "category_id": 4, "name": "Set Inciensos Chakras",
        "description": "7 aromas para equilibrar tus chakras", "price": Decimal("28.00"), "stock": 25,
        "recipe": "Resinas naturales, aceites esenciales específicos para cada chakra",
        "magical_properties": "Ayuda a equilibrar y alinear los siete chakras principales.",
    },
]

GALLERIES = [
    (1, "https://images.unsplash.com/photo-1578662996442-48f60103fc96?w=400&h=300", "Vela Aromática Lavanda"),
    (2, "https://images.unsplash.com/photo-1544947950-fa07a98d237f?w=400&h=300", "Jabón Artesanal Miel"),
    (3, "https://images.unsplash.com/photo-1531346878377-a5be20888e57?w=400&h=300", "Libreta Místico Dreams"),
]


def sample_coupons(now: datetime) -> list[CouponModel]:
    return [
        CouponModel(
            code="BIENVENIDO10",
            name="Bienvenida 10% descuento",
            description="10% de descuento para nuevos clientes",
            type="percentage",
            value=Decimal("10.00"),
            minimum_amount=Decimal("50.00"),
            max_discount=None,
            usage_limit=100,
            used_count=15,
            is_active=True,
            valid_from=now,
            valid_until=now + timedelta(days=30),
        ),
        CouponModel(
            code="VERANO25",
            name="Descuento de Verano",
            description="25% de descuento en productos seleccionados",
            type="percentage",
            value=Decimal("25.00"),
            minimum_amount=Decimal("100.00"),
            max_discount=Decimal("50.00"),
            usage_limit=50,
            used_count=8,
            is_active=True,
            valid_from=now,
            valid_until=now + timedelta(days=60),
        ),
    ]


def seed(db: Session) -> bool:
    """Insert the sample catalog and coupons; only when the catalog is empty."""
    repo = CatalogRepo(db)
    if repo.has_categories():
        return False

    now = datetime.now(timezone.utc)
    rows = [CategoryModel(id=i, name=n, description=d) for i, n, d in CATEGORIES]
    rows += [ProductModel(is_digital=False, **p) for p in PRODUCTS]
    rows += [ProductGalleryModel(product_id=p, image_url=u, alt_text=a) for p, u, a in GALLERIES]
    rows += sample_coupons(now)

    repo.add_all(rows)
    logger.info(f"Seeded {len(CATEGORIES)} categories, {len(PRODUCTS)} products and sample coupons")
    return True
