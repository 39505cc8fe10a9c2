"""Domain layer for fintrack application."""

__all__ = [
    "AccountService",
    "TransactionService",
    "SummaryService",
    "ExportService",
    "InvoiceService",
    "ProfileService",
    "GoalService",
    "NoteService",
]

_SERVICES = {
    "AccountService": "fintrack.domain.account",
    "TransactionService": "fintrack.domain.transaction",
    "SummaryService": "fintrack.domain.summary",
    "ExportService": "fintrack.domain.export",
    "InvoiceService": "fintrack.domain.invoice",
    "ProfileService": "fintrack.domain.profile",
    "GoalService": "fintrack.domain.savings",
    "NoteService": "fintrack.domain.notes",
}


# Services import the database layer, which imports entities from here,
# so services are resolved lazily.
def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module
        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
