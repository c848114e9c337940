"""Persistence for users and assets."""
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.database import Base
from app.models.assets import Asset, AssetData, AssetUpdate
from app.models.auth import User
from app.models.db import AssetRecord, UserRecord
from app.models.errors import DuplicateAssetError, DuplicateEmailError

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6_371_000
METERS_PER_DEGREE = 111_320

RecordT = TypeVar("RecordT", bound=Base)


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance between two points in meters using Haversine formula."""
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


class DocumentRepository(Generic[RecordT]):
    """Generic CRUD over one table; every call runs in its own session."""

    model: Type[RecordT]

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self.session_factory = session_factory

    async def get(self, record_id: str) -> Optional[RecordT]:
        async with self.session_factory() as session:
            return await session.get(self.model, record_id)

    async def find_one(self, **filters: Any) -> Optional[RecordT]:
        async with self.session_factory() as session:
            result = await session.execute(select(self.model).filter_by(**filters).limit(1))
            return result.scalars().first()

    async def insert(self, record: RecordT) -> RecordT:
        """
        Persist a new record.

        Raises:
            IntegrityError: If a unique constraint is violated
        """
        async with self.session_factory() as session:
            session.add(record)
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                raise
            await session.refresh(record)
            return record

    async def update_fields(self, record_id: str, values: Dict[str, Any]) -> Optional[RecordT]:
        async with self.session_factory() as session:
            record = await session.get(self.model, record_id)
            if record is None:
                return None
            for key, value in values.items():
                setattr(record, key, value)
            await session.commit()
            await session.refresh(record)
            return record

    async def delete_where(self, **filters: Any) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(delete(self.model).filter_by(**filters))
            await session.commit()
            return result.rowcount > 0


class UserRepository(DocumentRepository[UserRecord]):
    model = UserRecord

    @staticmethod
    def to_user(record: UserRecord) -> User:
        return User(
            id=record.id,
            email=record.email,
            first_name=record.first_name,
            last_name=record.last_name,
            role=record.role,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        return await self.find_one(email=email.strip().lower())

    async def create_user(
        self,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: str = "user",
    ) -> UserRecord:
        """
        Create a user; emails are stored lower-cased.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        email = email.strip().lower()
        record = UserRecord(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        try:
            record = await self.insert(record)
        except IntegrityError as exc:
            raise DuplicateEmailError(email) from exc
        logger.info(f"User created: {record.id}")
        return record


class AssetRepository(DocumentRepository[AssetRecord]):
    model = AssetRecord

    @staticmethod
    def to_asset(record: AssetRecord) -> Asset:
        return Asset.model_validate(
            {
                **(record.document or {}),
                "id": record.id,
                "createdAt": record.created_at,
                "updatedAt": record.updated_at,
            }
        )

    @staticmethod
    def _document(data: AssetData) -> Dict[str, Any]:
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)

    async def find_by_external_id(self, external_id: str) -> Optional[Asset]:
        record = await self.find_one(external_id=external_id)
        return self.to_asset(record) if record else None

    async def create(self, data: AssetData) -> Asset:
        """
        Persist a freshly mapped asset.

        Raises:
            DuplicateAssetError: If an asset with the same external id exists
        """
        logger.debug(f"Creating new asset: {data.external_id}")
        record = AssetRecord(
            external_id=data.external_id,
            display_name=data.display_name.text,
            formatted_address=data.formatted_address,
            latitude=data.location.latitude,
            longitude=data.location.longitude,
            primary_type=data.primary_type or None,
            category=data.category.value if data.category else None,
            document=self._document(data),
        )
        try:
            record = await self.insert(record)
        except IntegrityError as exc:
            logger.warning(f"Asset creation failed: {data.external_id} already exists")
            raise DuplicateAssetError(data.external_id) from exc
        logger.info(f"Asset created: {data.external_id}")
        return self.to_asset(record)

    async def update(self, external_id: str, changes: AssetUpdate) -> Optional[Asset]:
        """Apply the non-null fields of `changes`; returns None if the asset is unknown."""
        record = await self.find_one(external_id=external_id)
        if record is None:
            logger.warning(f"Asset update failed: {external_id} not found")
            return None

        patch = changes.model_dump(mode="json", by_alias=True, exclude_none=True)
        values: Dict[str, Any] = {
            "document": {**(record.document or {}), **patch},
            "updated_at": datetime.now(timezone.utc),
        }
        if changes.category is not None:
            values["category"] = changes.category.value

        updated = await self.update_fields(record.id, values)
        return self.to_asset(updated) if updated else None

    async def delete(self, external_id: str) -> bool:
        deleted = await self.delete_where(external_id=external_id)
        if deleted:
            logger.info(f"Asset deleted: {external_id}")
        return deleted

    async def find_nearby(
        self,
        lat: float,
        lng: float,
        radius_m: float,
        place_type: Optional[str] = None,
    ) -> List[Asset]:
        """Assets within `radius_m` meters, nearest first."""
        lat_delta = radius_m / METERS_PER_DEGREE
        lng_delta = radius_m / (METERS_PER_DEGREE * max(math.cos(math.radians(lat)), 1e-6))

        async with self.session_factory() as session:
            result = await session.execute(
                select(AssetRecord).where(
                    AssetRecord.latitude.between(lat - lat_delta, lat + lat_delta),
                    AssetRecord.longitude.between(lng - lng_delta, lng + lng_delta),
                )
            )
            candidates = result.scalars().all()

        matches = []
        for record in candidates:
            distance = calculate_distance(lat, lng, record.latitude, record.longitude)
            if distance > radius_m:
                continue
            if place_type and place_type not in (record.document or {}).get("types", []):
                continue
            matches.append((distance, record))

        matches.sort(key=lambda match: match[0])
        return [self.to_asset(record) for _, record in matches]

    async def search_text(self, query: str, limit: int = 20) -> List[Asset]:
        """Case-insensitive substring search over name and address."""
        pattern = f"%{query.strip()}%"
        async with self.session_factory() as session:
            result = await session.execute(
                select(AssetRecord)
                .where(
                    or_(
                        AssetRecord.display_name.ilike(pattern),
                        AssetRecord.formatted_address.ilike(pattern),
                    )
                )
                .order_by(AssetRecord.display_name)
                .limit(limit)
            )
            return [self.to_asset(record) for record in result.scalars().all()]
