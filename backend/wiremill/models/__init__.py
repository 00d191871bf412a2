from wiremill.models.item import Item
from wiremill.models.party import Party
from wiremill.models.gst_rate import GSTRate
from wiremill.models.bom import BOMRule
from wiremill.models.stock import StockEntry
from wiremill.models.conversion import ConversionTransaction
from wiremill.models.invoice import TaxInvoice
from wiremill.models.receipt import GoodsReceipt
from wiremill.models.sequence import DocumentSequence

__all__ = [
    "Item",
    "Party",
    "GSTRate",
    "BOMRule",
    "StockEntry",
    "ConversionTransaction",
    "TaxInvoice",
    "GoodsReceipt",
    "DocumentSequence",
]
