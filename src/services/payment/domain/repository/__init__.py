from .settlement_ledger import SettlementLedger

__all__ = ["SettlementLedger"]
