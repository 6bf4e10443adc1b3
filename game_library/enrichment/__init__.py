"""
BoardGameGeek enrichment.

Responsibilities:
- Look catalog titles up on the BGG XML API2.
- Parse game details (images, description, stats, player poll) from XML.
- Fill in catalog fields that are still empty, never overwriting edits.
"""
