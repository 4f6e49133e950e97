import os
import logging
from typing import List, Optional
from sqlalchemy import create_engine, inspect, select
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from errors import DuplicateIdError, NotFoundError, StorageFailure, ValidationError
from models import Base, Screening
from schemas import ScreeningOut

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create the engine for a connection string.

    SQLite files get their parent directory created, and connections may be
    used from FastAPI's worker threads.
    """
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            db_dir = os.path.dirname(url.database)
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)
    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)


class ScreeningStore:
    """Persistence for screenings. Every method is one independent statement."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.Session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)

    def init_schema(self):
        """Create the screenings table if it is absent.

        Another instance may create it between the existence check and our
        CREATE; that error is ignored once the table is visible.
        """
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            if inspect(self.engine).has_table(Screening.__tablename__):
                logger.info("Screenings table created concurrently by another instance")
                return
            raise StorageFailure(f"Schema creation failed: {e}") from e
        logger.info("Schema ready (%s backend)", self.engine.url.get_backend_name())

    def dispose(self):
        self.engine.dispose()

    def create(
        self,
        screening_id: str,
        prompt: str,
        job_title: Optional[str] = None,
        company_name: Optional[str] = None,
        job_description: Optional[str] = None,
        candidate_name: Optional[str] = None,
        candidate_email: Optional[str] = None,
    ) -> None:
        if not screening_id or not screening_id.strip():
            raise ValidationError("id cannot be empty.")
        # ids are used as a single URL path segment
        if "/" in screening_id:
            raise ValidationError("id cannot contain '/'.")
        if not prompt or not prompt.strip():
            raise ValidationError("prompt cannot be empty.")

        with self.Session() as s:
            s.add(
                Screening(
                    id=screening_id,
                    prompt=prompt,
                    job_title=job_title,
                    company_name=company_name,
                    job_description=job_description,
                    candidate_name=candidate_name,
                    candidate_email=candidate_email,
                )
            )
            try:
                s.commit()
            except IntegrityError as e:
                s.rollback()
                logger.warning("Duplicate screening id %r", screening_id)
                raise DuplicateIdError() from e
            except SQLAlchemyError as e:
                s.rollback()
                logger.error("Failed to create screening %r: %s", screening_id, e)
                raise StorageFailure("Failed to create screening") from e

    def get(self, screening_id: str) -> ScreeningOut:
        try:
            with self.Session() as s:
                row = s.get(Screening, screening_id)
                if row is None:
                    raise NotFoundError()
                return ScreeningOut.model_validate(row)
        except SQLAlchemyError as e:
            logger.error("Failed to load screening %r: %s", screening_id, e)
            raise StorageFailure("Failed to load screening") from e

    def exists(self, screening_id: str) -> bool:
        try:
            self.get(screening_id)
        except NotFoundError:
            return False
        return True

    def update_candidate_info(self, screening_id: str, name: str, email: str) -> None:
        """Overwrite the candidate fields. The prompt is never touched."""
        try:
            with self.Session() as s:
                row = s.get(Screening, screening_id)
                if row is None:
                    raise NotFoundError()
                row.candidate_name = name
                row.candidate_email = email
                s.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to update screening %r: %s", screening_id, e)
            raise StorageFailure("Failed to update screening") from e

    def list_recent(self, limit: int) -> List[ScreeningOut]:
        if limit < 1:
            raise ValidationError("limit must be > 0")
        stmt = select(Screening).order_by(Screening.created_at.desc()).limit(limit)
        try:
            with self.Session() as s:
                return [ScreeningOut.model_validate(r) for r in s.scalars(stmt)]
        except SQLAlchemyError as e:
            logger.error("Failed to list screenings: %s", e)
            raise StorageFailure("Failed to list screenings") from e


def seed_samples(store: ScreeningStore, samples: dict) -> int:
    """Insert demo screenings that are not stored yet. Returns the number added."""
    added = 0
    for screening_id, prompt in samples.items():
        if store.exists(screening_id):
            continue
        try:
            store.create(screening_id, prompt)
        except DuplicateIdError:
            # another instance seeded it first
            continue
        added += 1
    if added:
        logger.info("Seeded %d sample screening(s)", added)
    return added
