# File: marketplace/db/store.py

"""
Credential store: every query the services run against the database.

Services receive a store instance instead of touching a Session directly,
so tests can swap in an in-memory double that satisfies ``CredentialStore``.
Every SQLAlchemy failure leaves the session rolled back and is re-raised
as StoreError (or ConflictError for unique-constraint violations where the
caller asks for it).
"""

import logging
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import Any, Iterator, Optional, Protocol

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.core.errors import ConflictError, StoreError
from marketplace.models.bid import Bid
from marketplace.models.offer import Offer
from marketplace.models.user import User

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    def get_user_by_id(self, user_id: int) -> Optional[User]: ...

    def user_exists(self, *, username: str, email: Optional[str]) -> bool: ...

    def create_user(self, **fields: Any) -> User: ...

    def update_user(self, user_id: int, **fields: Any) -> Optional[User]: ...

    def list_offers(self) -> list[dict]: ...

    def list_offers_by_offerer(self, offerer_id: int) -> list[dict]: ...

    def get_offer_detail(self, offer_id: int) -> Optional[dict]: ...

    def create_offer(self, **fields: Any) -> Offer: ...

    def create_bid(self, *, offer_id: int, bidder_id: int, price: Decimal) -> Optional[Bid]: ...

    def list_bids_for_offer(self, offer_id: int) -> list[dict]: ...

    def delete_owned_offer(self, offer_id: int, username: str) -> Optional[int]: ...


class SqlStore:
    """CredentialStore backed by a SQLAlchemy session (one per request)."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str, conflict: Optional[ConflictError] = None) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            self.db.rollback()
            if conflict is not None:
                logger.info("%s rejected by unique constraint: %s", operation, exc.orig)
                raise conflict from exc
            logger.exception("Store operation %s violated an integrity constraint", operation)
            raise StoreError(str(exc)) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Store operation %s failed", operation)
            raise StoreError(str(exc)) from exc

    # ---------- users ----------

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._guard("get_user_by_username"):
            return self.db.scalars(select(User).where(User.username == username)).first()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        with self._guard("get_user_by_id"):
            return self.db.get(User, user_id)

    def user_exists(self, *, username: str, email: Optional[str]) -> bool:
        clause = User.username == username
        if email is not None:
            clause = clause | (User.email == email)
        with self._guard("user_exists"):
            return self.db.scalar(select(exists().where(clause)))

    def create_user(self, **fields: Any) -> User:
        conflict = ConflictError("User with this email or username already exists.")
        with self._guard("create_user", conflict=conflict):
            user = User(**fields)
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user

    def update_user(self, user_id: int, **fields: Any) -> Optional[User]:
        conflict = ConflictError("Email is already in use.")
        with self._guard("update_user", conflict=conflict):
            user = self.db.get(User, user_id)
            if user is None:
                return None
            for name, value in fields.items():
                setattr(user, name, value)
            self.db.commit()
            self.db.refresh(user)
            return user

    # ---------- offers ----------

    def list_offers(self) -> list[dict]:
        stmt = (
            select(
                Offer.id,
                Offer.product,
                Offer.quantity,
                Offer.start_date,
                Offer.end_date,
                Offer.batches,
                Offer.price,
                User.username.label("offerer_name"),
            )
            .join(User, Offer.offerer == User.id)
            .order_by(Offer.id)
        )
        with self._guard("list_offers"):
            return [dict(row) for row in self.db.execute(stmt).mappings()]

    def list_offers_by_offerer(self, offerer_id: int) -> list[dict]:
        stmt = (
            select(
                Offer.id,
                Offer.product,
                Offer.quantity,
                Offer.start_date,
                Offer.end_date,
                Offer.batches,
                Offer.price,
            )
            .where(Offer.offerer == offerer_id)
            .order_by(Offer.id)
        )
        with self._guard("list_offers_by_offerer"):
            return [dict(row) for row in self.db.execute(stmt).mappings()]

    def get_offer_detail(self, offer_id: int) -> Optional[dict]:
        stmt = (
            select(
                Offer.id,
                Offer.product,
                Offer.quantity,
                Offer.start_date,
                Offer.end_date,
                Offer.batches,
                Offer.price,
                Offer.offerer,
                User.username.label("offerer_name"),
                User.role.label("offerer_role"),
            )
            .join(User, Offer.offerer == User.id)
            .where(Offer.id == offer_id)
        )
        with self._guard("get_offer_detail"):
            row = self.db.execute(stmt).mappings().first()
        return dict(row) if row is not None else None

    def create_offer(
        self,
        *,
        product: str,
        quantity: int,
        start_date: date,
        end_date: date,
        price: Decimal,
        batches: int,
        offerer: int,
    ) -> Offer:
        with self._guard("create_offer"):
            offer = Offer(
                product=product,
                quantity=quantity,
                start_date=start_date,
                end_date=end_date,
                price=price,
                batches=batches,
                offerer=offerer,
            )
            self.db.add(offer)
            self.db.commit()
            self.db.refresh(offer)
            return offer

    # ---------- bids ----------

    def create_bid(self, *, offer_id: int, bidder_id: int, price: Decimal) -> Optional[Bid]:
        """Insert a bid, or return None when the offer does not exist."""
        with self._guard("create_bid"):
            if self.db.get(Offer, offer_id) is None:
                self.db.rollback()
                return None
            bid = Bid(bidder=bidder_id, offer=offer_id, price=price)
            self.db.add(bid)
            self.db.commit()
            self.db.refresh(bid)
            return bid

    def list_bids_for_offer(self, offer_id: int) -> list[dict]:
        stmt = (
            select(
                Bid.id,
                Bid.price,
                Bid.bidder,
                User.username.label("bidder_name"),
            )
            .join(User, Bid.bidder == User.id)
            .where(Bid.offer == offer_id)
            .order_by(Bid.id)
        )
        with self._guard("list_bids_for_offer"):
            return [dict(row) for row in self.db.execute(stmt).mappings()]

    # ---------- delete ----------

    def delete_owned_offer(self, offer_id: int, username: str) -> Optional[int]:
        """
        Delete ``offer_id`` if ``username`` owns it, in a single transaction.

        Returns None when the username is unknown, otherwise the number of
        offer rows removed (0 when the offer is missing or owned by someone else).
        """
        with self._guard("delete_owned_offer"):
            owner_id = self.db.scalar(select(User.id).where(User.username == username))
            if owner_id is None:
                self.db.rollback()
                return None

            owned = exists().where(Offer.id == offer_id, Offer.offerer == owner_id)
            self.db.execute(
                delete(Bid)
                .where(Bid.offer == offer_id, owned)
                .execution_options(synchronize_session=False)
            )
            result = self.db.execute(
                delete(Offer)
                .where(Offer.id == offer_id, Offer.offerer == owner_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self.db.rollback()
                return 0
            self.db.commit()
            return result.rowcount
