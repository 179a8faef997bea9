"""
Services Layer

Pure business logic services that:
- Accept domain inputs (IDs, sessions, filter/patch dicts, actors)
- Return domain outputs (models, dataclasses)
- Raise app.services.errors.CatalogError subclasses, never HTTPException
- Do NOT depend on HTTP request/response objects
"""
