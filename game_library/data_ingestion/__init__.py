"""
Inventory CSV import.

Responsibilities:
- Read the library's inventory spreadsheet export.
- Map each row positionally onto the catalog's game document schema.
- Write every game into the document store under its inventory id.
"""
