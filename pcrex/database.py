import functools
import logging
import time
from typing import List
from typing import Optional

from sqlalchemy import JSON
from sqlalchemy import Column
from sqlalchemy import DateTime
from sqlalchemy import Float
from sqlalchemy import Integer
from sqlalchemy import String
from sqlalchemy import Text
from sqlalchemy import create_engine
from sqlalchemy import text
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.sql import func

from pcrex.settings import READ_ONLY_MODE
from pcrex.telemetry import get_tracer

logger = logging.getLogger(__name__)

Base = declarative_base()


def log_execution_time(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        tracer = get_tracer("pcrex.database")
        with tracer.start_as_current_span(f"db_{func.__name__}") as span:
            span.set_attribute("db.operation", func.__name__)
            span.set_attribute("db.system", "postgresql")

            start_time = time.time()
            result = func(*args, **kwargs)
            elapsed = time.time() - start_time

            span.set_attribute("db.duration_seconds", elapsed)
            logger.debug(f"{func.__name__} completed in {elapsed:.2f} seconds")
            return result

    return wrapper


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False)
    category = Column(String)
    quantity = Column(Integer, default=0)
    image = Column(String)  # main image, raw reference as written
    images = Column(JSON)  # list of raw references
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "quantity": self.quantity if self.quantity is not None else 0,
            "image": self.image,
            "images": list(self.images) if isinstance(self.images, list) else [],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class Database:
    def __init__(self, db_url: str):
        self.engine = create_engine(
            db_url,
            pool_size=10,
            max_overflow=0,  # No overflow
            pool_timeout=30,  # Timeout for getting a connection
            pool_recycle=300,  # Recycle connections after 5 minutes
            pool_pre_ping=True,  # Test connections before use
        )
        self.Session = sessionmaker(bind=self.engine)
        Base.metadata.create_all(self.engine)

        self.read_only_mode = READ_ONLY_MODE
        if self.read_only_mode:
            logger.warning("DATABASE IN READ-ONLY MODE - All write operations will be blocked")

        logger.info("Database connection established")
        self.log_database_summary()

    @log_execution_time
    def log_database_summary(self):
        with self.Session() as session:
            total_products = session.query(Product).count()
            logger.info(f"Database summary: {total_products:,} products")

    @log_execution_time
    def get_all_products(self) -> List[dict]:
        with self.Session() as session:
            products = session.query(Product).order_by(Product.id).all()
            return [p.to_dict() for p in products]

    @log_execution_time
    def get_product(self, product_id: int) -> Optional[dict]:
        with self.Session() as session:
            product = session.get(Product, product_id)
            return product.to_dict() if product else None

    @log_execution_time
    def add_product(
        self,
        name: str,
        price: float,
        description: str = "",
        category: Optional[str] = None,
        quantity: int = 0,
        images: Optional[List[str]] = None,
    ) -> Optional[int]:
        if self.read_only_mode:
            logger.debug("Blocked add_product (READ-ONLY MODE)")
            return None

        images = list(images or [])
        with self.Session() as session:
            product = Product(
                name=name,
                description=description,
                price=price,
                category=category,
                quantity=quantity,
                images=images,
                image=images[0] if images else None,  # first image is the main one
            )
            session.add(product)
            session.commit()
            return product.id

    @log_execution_time
    def delete_product(self, product_id: int) -> Optional[bool]:
        """Delete a product; False when it does not exist, None when writes are blocked."""
        if self.read_only_mode:
            logger.debug("Blocked delete_product (READ-ONLY MODE)")
            return None

        with self.Session() as session:
            product = session.get(Product, product_id)
            if product is None:
                return False
            session.delete(product)
            session.commit()
            return True

    @log_execution_time
    def update_product_images(self, product_id: int, image: Optional[str], images: List[str]) -> bool:
        if self.read_only_mode:
            logger.debug("Blocked update_product_images (READ-ONLY MODE)")
            return False

        with self.Session() as session:
            product = session.get(Product, product_id)
            if product is None:
                return False
            product.image = image
            product.images = list(images)
            session.commit()
            return True

    def ping(self) -> None:
        with self.Session() as session:
            session.execute(text("SELECT 1"))

    def close(self):
        self.engine.dispose()
