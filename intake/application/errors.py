from __future__ import annotations


class AppError(RuntimeError):
    """Base application-level error."""


class PreconditionError(AppError):
    """Required field missing before export or submission."""


class CollaboratorError(AppError):
    """An external collaborator (storage, document, e-mail) failed."""


class PersistenceError(CollaboratorError):
    pass


class DocumentExportError(CollaboratorError):
    pass


class NotificationError(CollaboratorError):
    pass
