from sqlalchemy.orm import Session, joinedload
from typing import Any, Dict, List, Optional
from uuid import UUID
from datetime import datetime, timezone
import logging

from .models import Vroom
from ..products.models import Product
from ..schemas.vroom import VroomCreate, VroomUpdate, VroomResponse

logger = logging.getLogger(__name__)


class VroomService:

    @staticmethod
    def create_vroom(db: Session, user_id: str, vroom_data: VroomCreate) -> Vroom:
        try:
            vroom = Vroom(user_id=user_id, **vroom_data.model_dump())
            db.add(vroom)
            db.commit()
            db.refresh(vroom)
            logger.info(f"Created vroom {vroom.id} for user {user_id}")
            return vroom
        except Exception as e:
            logger.error(f"Error creating vroom for user {user_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def get_vroom(db: Session, vroom_id: UUID) -> Optional[Vroom]:
        return db.query(Vroom).filter(Vroom.id == vroom_id).first()

    @staticmethod
    def get_vrooms_by_user(db: Session, user_id: str) -> List[Vroom]:
        """Active vrooms of one owner, newest first"""
        return (
            db.query(Vroom)
            .filter(Vroom.user_id == user_id, Vroom.is_active.is_(True))
            .order_by(Vroom.created_at.desc(), Vroom.id.desc())
            .all()
        )

    @staticmethod
    def get_vroom_with_products(db: Session, vroom_id: UUID) -> Optional[Dict[str, Any]]:
        """Storefront view: the vroom, its owner and the owner's available products."""
        vroom = (
            db.query(Vroom)
            .options(joinedload(Vroom.user))
            .filter(Vroom.id == vroom_id)
            .first()
        )
        if not vroom:
            return None

        products = (
            db.query(Product)
            .filter(Product.user_id == vroom.user_id, Product.is_available.is_(True))
            .order_by(Product.created_at.desc(), Product.id.desc())
            .all()
        )
        return {
            **VroomResponse.model_validate(vroom).model_dump(),
            "user": vroom.user,
            "products": products,
        }

    @staticmethod
    def update_vroom(db: Session, vroom_id: UUID, vroom_data: VroomUpdate) -> Optional[Vroom]:
        vroom = db.query(Vroom).filter(Vroom.id == vroom_id).first()
        if not vroom:
            logger.warning(f"Update requested for missing vroom {vroom_id}")
            return None

        changes = vroom_data.model_dump(exclude_unset=True)
        try:
            for field, value in changes.items():
                setattr(vroom, field, value)
            vroom.updated_at = datetime.now(timezone.utc)

            db.commit()
            db.refresh(vroom)
            logger.info(f"Updated vroom {vroom_id}: {sorted(changes)}")
            return vroom
        except Exception as e:
            logger.error(f"Error updating vroom {vroom_id}: {e}")
            db.rollback()
            raise

    @staticmethod
    def get_trending_vrooms(db: Session, limit: int = 10) -> List[Vroom]:
        return (
            db.query(Vroom)
            .filter(Vroom.is_active.is_(True))
            .order_by(
                Vroom.followers_count.desc(),
                Vroom.views_count.desc(),
                Vroom.created_at.desc(),
                Vroom.id.desc(),
            )
            .limit(limit)
            .all()
        )

    @staticmethod
    def increment_vroom_views(db: Session, vroom_id: UUID) -> None:
        db.query(Vroom).filter(Vroom.id == vroom_id).update(
            {Vroom.views_count: Vroom.views_count + 1}, synchronize_session=False
        )
        db.commit()
