"""Repository for whole-resource privilege documents."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from hotel_console.core.exceptions import ConflictException, PersistenceFailureException
from hotel_console.models.privilege_document import PrivilegeDocument, PrivilegeResource

logger = logging.getLogger(__name__)


class PrivilegeDocumentRepository:
    """
    Load and save privilege documents.

    Database errors are rolled back and re-raised as
    PersistenceFailureException; a save that lost a race with another
    save becomes ConflictException. Nothing is retried here.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, resource: PrivilegeResource) -> PrivilegeDocument | None:
        """Get the stored document, or None if it was never saved"""
        try:
            return (
                self.db.query(PrivilegeDocument)
                .filter(PrivilegeDocument.resource == resource.value)
                .first()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to load %s: %s", resource.value, e)
            raise PersistenceFailureException(f"Could not load {resource.value}") from e

    def save(
        self, resource: PrivilegeResource, payload: dict, document: PrivilegeDocument | None
    ) -> PrivilegeDocument:
        """
        Replace the whole document; the mapper bumps its version.

        Args:
            resource: Which document to write
            payload: New document body
            document: Row previously loaded with get(), None if absent

        Returns:
            The saved row

        Raises:
            ConflictException: If the row changed or appeared since it was loaded
            PersistenceFailureException: On any other database error
        """
        try:
            if document is None:
                document = PrivilegeDocument(resource=resource.value, payload=payload)
                self.db.add(document)
            else:
                document.payload = payload
            self.db.commit()
            self.db.refresh(document)
            return document
        except (StaleDataError, IntegrityError) as e:
            self.db.rollback()
            logger.warning("Concurrent save of %s rejected: %s", resource.value, e)
            raise ConflictException(
                f"{resource.value} was changed by someone else; reload and retry"
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to save %s: %s", resource.value, e)
            raise PersistenceFailureException(f"Could not save {resource.value}") from e
