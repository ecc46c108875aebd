"""Domain layer for bankledger application."""

# Services are imported lazily: the database layer imports domain.entities,
# and the services import the database layer.
_SERVICES = {
    "AccountService": "bankledger.domain.account",
    "BalanceMutator": "bankledger.domain.balance",
    "CategoryService": "bankledger.domain.category",
    "ChartOfAccountService": "bankledger.domain.category",
    "ImportService": "bankledger.domain.bulk_import",
    "TransactionService": "bankledger.domain.transaction",
    "TransferService": "bankledger.domain.transfer",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
