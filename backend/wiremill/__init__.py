"""Wire-drawing and annealing back office: stock ledger, BOM-validated conversions, tax invoices."""
