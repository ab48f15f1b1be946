"""Parse OCR text of German shop receipts into itemized, categorized records."""
