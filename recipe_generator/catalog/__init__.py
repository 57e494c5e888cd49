"""
Recipe catalog package.

Responsibilities:
- Load the curated recipe collection shipped with the service.
- Validate every record into an immutable Recipe model.
- Expose the normalized ingredient vocabulary for autosuggestion.
- Provide a pandas index over the catalog for fast hard filtering.
"""
