"""Tests for the category upsert / delete service against SQLite."""

import pytest

from backoffice import db
from backoffice.models import Category
from backoffice.services.category_service import (
    UpsertError,
    delete_category,
    find_category_by_slug,
    find_category_list,
    upsert_category,
)
from backoffice.services.tool_service import find_tool_list


def _payload(**overrides):
    data = {
        'id': None,
        'name': 'Open Source',
        'slug': '',
        'label': '',
        'description': '',
        'parent_id': None,
        'tools': [],
    }
    data.update(overrides)
    return data


class TestUpsertCreate:

    def test_creates_top_level_category(self, app):
        record = upsert_category(_payload(slug='open-source', label='Open Source Tools'))

        assert record['id'] is not None
        assert record['slug'] == 'open-source'
        assert record['full_path'] == 'open-source'
        assert record['label'] == 'Open Source Tools'
        assert record['parent_id'] is None

    def test_generates_unique_slug_when_empty(self, make_category):
        make_category('Open Source')

        record = upsert_category(_payload())

        assert record['slug'] == 'open-source-1'

    def test_full_path_follows_parent(self, make_category):
        parent = make_category('Developer Tools')

        record = upsert_category(_payload(name='Monitoring', slug='monitoring', parent_id=parent.id))

        assert record['full_path'] == 'developer-tools/monitoring'
        assert record['parent_id'] == parent.id

    def test_links_tools_in_given_order(self, make_tool):
        zed = make_tool('Zed')
        atom = make_tool('Atom')

        record = upsert_category(_payload(tools=[zed.id, atom.id]))

        assert sorted(tool['id'] for tool in record['tools']) == sorted([zed.id, atom.id])

    def test_unknown_tool_is_rejected(self, app):
        with pytest.raises(UpsertError) as exc_info:
            upsert_category(_payload(tools=[404]))

        assert exc_info.value.status_code == 404
        assert Category.query.count() == 0

    def test_duplicate_slug_is_rejected(self, make_category):
        make_category('Open Source')

        with pytest.raises(UpsertError) as exc_info:
            upsert_category(_payload(name='Other', slug='open-source'))

        assert exc_info.value.status_code == 409
        assert 'already in use' in exc_info.value.message

    def test_reserved_slug_is_rejected(self, app):
        with pytest.raises(UpsertError) as exc_info:
            upsert_category(_payload(name='New', slug='new'))

        assert exc_info.value.status_code == 400
        assert Category.query.count() == 0

    def test_generated_slug_avoids_reserved_names(self, app):
        record = upsert_category(_payload(name='Computed Fields'))

        assert record['slug'] == 'computed-fields-1'

    def test_missing_parent_is_rejected(self, app):
        with pytest.raises(UpsertError) as exc_info:
            upsert_category(_payload(parent_id=123))

        assert exc_info.value.status_code == 404


class TestUpsertUpdate:

    def test_updates_fields_and_replaces_tools(self, make_category, make_tool):
        old_tool = make_tool('Old Tool')
        new_tool = make_tool('New Tool')
        category = make_category('Analytics', label='Analytics Tools', tools=[old_tool])

        record = upsert_category(_payload(
            id=category.id, name='Analytics', slug='analytics',
            label='Analytics Software', description='Numbers', tools=[new_tool.id],
        ))

        assert record['label'] == 'Analytics Software'
        assert record['description'] == 'Numbers'
        assert [tool['id'] for tool in record['tools']] == [new_tool.id]

    def test_slug_change_rewrites_descendant_paths(self, make_category):
        root = make_category('Developer Tools')
        child = make_category('Monitoring', parent=root)
        grandchild = make_category('Tracing', parent=child)

        upsert_category(_payload(id=root.id, name='Developer Tools', slug='dev-tools'))

        db.session.expire_all()
        assert db.session.get(Category, child.id).full_path == 'dev-tools/monitoring'
        assert db.session.get(Category, grandchild.id).full_path == 'dev-tools/monitoring/tracing'

    def test_parent_change_is_rejected_when_category_has_subcategories(self, make_category):
        root = make_category('Developer Tools')
        other = make_category('Security')
        make_category('Monitoring', parent=root)

        with pytest.raises(UpsertError) as exc_info:
            upsert_category(_payload(id=root.id, name='Developer Tools', slug='developer-tools', parent_id=other.id))

        assert 'subcategories' in exc_info.value.message
        db.session.expire_all()
        assert db.session.get(Category, root.id).parent_id is None

    def test_category_cannot_be_its_own_parent(self, make_category):
        category = make_category('Security')

        with pytest.raises(UpsertError):
            upsert_category(_payload(id=category.id, name='Security', slug='security', parent_id=category.id))

    def test_keeping_own_slug_is_not_a_conflict(self, make_category):
        category = make_category('Security')

        record = upsert_category(_payload(id=category.id, name='Security & Privacy', slug='security'))

        assert record['slug'] == 'security'
        assert record['name'] == 'Security & Privacy'

    def test_missing_category_is_rejected(self, app):
        with pytest.raises(UpsertError) as exc_info:
            upsert_category(_payload(id=999))

        assert exc_info.value.status_code == 404


class TestQueriesAndDelete:

    def test_find_category_list_reports_subcategories(self, make_category):
        root = make_category('Developer Tools')
        make_category('Monitoring', parent=root)

        summaries = {item['slug']: item for item in find_category_list()}

        assert summaries['developer-tools']['has_subcategories'] is True
        assert summaries['monitoring']['has_subcategories'] is False
        assert summaries['monitoring']['parent_id'] == root.id
        assert summaries['monitoring']['full_path'] == 'developer-tools/monitoring'

    def test_find_category_by_slug(self, make_category):
        make_category('Security')

        assert find_category_by_slug('security').name == 'Security'
        assert find_category_by_slug('nope') is None

    def test_delete_promotes_children_to_top_level(self, make_category):
        root = make_category('Developer Tools')
        child = make_category('Monitoring', parent=root)
        grandchild = make_category('Tracing', parent=child)

        delete_category(root)

        db.session.expire_all()
        assert find_category_by_slug('developer-tools') is None
        promoted = db.session.get(Category, child.id)
        assert promoted.parent_id is None
        assert promoted.full_path == 'monitoring'
        assert db.session.get(Category, grandchild.id).full_path == 'monitoring/tracing'

    def test_find_tool_list_paginates_and_searches(self, make_tool):
        for name in ['Umami', 'Plausible', 'Matomo', 'PostHog']:
            make_tool(name)

        page = find_tool_list(limit=2, offset=1)
        assert page['total'] == 4
        assert [tool['name'] for tool in page['tools']] == ['Plausible', 'PostHog']

        search = find_tool_list(query='post')
        assert [tool['name'] for tool in search['tools']] == ['PostHog']
