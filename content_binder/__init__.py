"""FastAPI application package for the content binding service.

Maps published content to the view-model shapes handlers ask for
(`ContentModel`, `ContentModel[S]` or the content node itself). Business
logic lives in `content_binder/logic/`, route handlers in
`content_binder/routes/`.
"""

from __future__ import annotations

from content_binder.main import create_app

__all__ = ["create_app"]
