"""Pytest configuration and fixtures for the back-office tests."""

import pytest

from backoffice import create_app, db
from backoffice.models import Category, Tool, ToolStatus
from backoffice.services.category_service import build_full_path
from backoffice.utils.error_handler import ErrorHandler


@pytest.fixture
def app():
    """Flask app bound to an in-memory SQLite database."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'SQLALCHEMY_ECHO': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def reset_error_stats():
    ErrorHandler.reset_stats()
    yield
    ErrorHandler.reset_stats()


@pytest.fixture
def make_tool(app):
    """Factory creating a persisted tool."""
    def _make_tool(name, slug=None, status=ToolStatus.PUBLISHED):
        tool = Tool(name=name, slug=slug or name.lower().replace(' ', '-'), status=status)
        db.session.add(tool)
        db.session.commit()
        return tool

    return _make_tool


@pytest.fixture
def make_category(app):
    """Factory creating a persisted category with a consistent full path."""
    def _make_category(name, slug=None, parent=None, label=None, tools=None):
        slug = slug or name.lower().replace(' ', '-')
        category = Category(
            name=name,
            slug=slug,
            label=label,
            parent=parent,
            full_path=build_full_path(parent, slug),
            tools=list(tools or []),
        )
        db.session.add(category)
        db.session.commit()
        return category

    return _make_category
