"""Tests for the category form, computed fields and the editor submission flow."""

from types import SimpleNamespace

import pytest

from backoffice.services.category_editor import (
    SUBMIT_PENDING_MESSAGE,
    CategoryEditor,
    CategoryForm,
    ComputedField,
    derive_label,
)
from backoffice.services.category_service import UpsertError


def _existing_category(**overrides):
    values = {
        'id': 7,
        'name': 'Analytics',
        'slug': 'analytics',
        'label': 'Analytics Tools',
        'description': 'Measure things',
        'parent_id': None,
        'tools': [SimpleNamespace(id=1), SimpleNamespace(id=2)],
        'has_subcategories': False,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class RecordingUpsert:
    """Stands in for upsert_category and records every call."""

    def __init__(self, result=None, error=None):
        self.calls = []
        self.result = result
        self.error = error

    def __call__(self, payload):
        self.calls.append(payload)
        if self.error is not None:
            raise self.error
        if self.result is not None:
            return self.result
        return {**payload, 'id': payload['id'] or 42, 'slug': payload['slug'] or 'generated'}


def _editor(category=None, upsert=None, categories=None, **kwargs):
    return CategoryEditor(
        category,
        tools=[{'id': 1, 'name': 'Plausible', 'slug': 'plausible'}],
        categories=categories or [],
        upsert=upsert or RecordingUpsert(),
        **kwargs,
    )


class TestComputedFields:

    def test_derive_label(self):
        assert derive_label('Open Source') == 'Open Source Tools'
        assert derive_label('') == ''

    def test_new_record_derives_slug_and_label_from_name(self):
        form = CategoryForm()

        form.set_value('name', 'Open Source')

        assert form.values['slug'] == 'open-source'
        assert form.values['label'] == 'Open Source Tools'

    def test_clearing_name_clears_label(self):
        form = CategoryForm()
        form.set_value('name', 'Open Source')

        form.set_value('name', '')

        assert form.values['slug'] == ''
        assert form.values['label'] == ''

    def test_existing_record_never_recomputes(self):
        form = CategoryForm(_existing_category(slug='hand-edited', label='Hand Edited'))

        form.set_value('name', 'Something Else')

        assert form.values['name'] == 'Something Else'
        assert form.values['slug'] == 'hand-edited'
        assert form.values['label'] == 'Hand Edited'

    def test_explicit_values_override_computed_ones(self):
        form = CategoryForm()

        form.set_values({'slug': 'custom', 'name': 'Open Source', 'label': 'Best OSS'})

        assert form.values['slug'] == 'custom'
        assert form.values['label'] == 'Best OSS'

    def test_changing_other_fields_does_not_trigger(self):
        computed = ComputedField('name', 'slug', lambda value: 'changed')
        values = {'name': 'x', 'slug': 'kept'}

        assert computed.apply(values, 'description') is False
        assert values['slug'] == 'kept'

    def test_unknown_field_is_rejected(self):
        with pytest.raises(KeyError):
            CategoryForm().set_value('color', 'red')

    def test_defaults_from_existing_category(self):
        form = CategoryForm(_existing_category(parent_id=3, label=None))

        assert form.values == {
            'name': 'Analytics',
            'slug': 'analytics',
            'label': '',
            'description': 'Measure things',
            'parent_id': 3,
            'tools': [1, 2],
        }


class TestCategoryEditorSubmit:

    def test_empty_name_fails_validation_without_upsert(self):
        upsert = RecordingUpsert()
        editor = _editor(upsert=upsert)

        result = editor.submit()

        assert result.success is False
        assert 'name' in result.errors
        assert result.status_code == 400
        assert upsert.calls == []
        assert editor.notifications == []

    def test_create_redirects_to_returned_slug(self):
        upsert = RecordingUpsert(result={'id': 42, 'slug': 'open-source-1', 'name': 'Open Source'})
        navigated = []
        notified = []
        editor = _editor(upsert=upsert, navigate=navigated.append,
                         notify=lambda level, message: notified.append((level, message)))

        editor.form.set_value('name', 'Open Source')
        result = editor.submit()

        assert result.success is True
        assert result.status_code == 201
        assert result.redirect == '/admin/categories/open-source-1'
        assert navigated == ['/admin/categories/open-source-1']
        assert notified == [('success', 'Category successfully created')]
        assert upsert.calls == [{
            'id': None,
            'name': 'Open Source',
            'slug': 'open-source',
            'label': 'Open Source Tools',
            'description': '',
            'parent_id': None,
            'tools': [],
        }]

    def test_update_with_unchanged_slug_does_not_redirect(self):
        category = _existing_category()
        editor = _editor(category=category)

        editor.form.set_value('description', 'Updated description')
        result = editor.submit()

        assert result.success is True
        assert result.status_code == 200
        assert result.redirect is None
        assert editor.navigated_to is None
        assert editor.notifications[-1].message == 'Category successfully updated'

    def test_update_with_changed_slug_redirects(self):
        upsert = RecordingUpsert()
        editor = _editor(category=_existing_category(), upsert=upsert)

        editor.form.set_value('slug', 'web-analytics')
        result = editor.submit()

        assert upsert.calls[0]['id'] == 7
        assert result.redirect == '/admin/categories/web-analytics'

    def test_upsert_error_is_notified_and_form_is_kept(self):
        upsert = RecordingUpsert(error=UpsertError('Slug "analytics" is already in use', 409))
        editor = _editor(upsert=upsert)
        editor.form.set_value('name', 'Analytics')

        result = editor.submit()

        assert result.success is False
        assert result.status_code == 409
        assert result.redirect is None
        assert editor.notifications[-1].level == 'error'
        assert editor.notifications[-1].message == 'Slug "analytics" is already in use'
        assert editor.form.values['name'] == 'Analytics'
        assert len(upsert.calls) == 1

    def test_second_submit_while_pending_is_refused(self):
        editor = None
        nested_results = []

        def reentrant_upsert(payload):
            assert editor.is_pending
            nested_results.append(editor.submit())
            return {**payload, 'id': 1, 'slug': 'analytics'}

        editor = _editor(upsert=reentrant_upsert)
        editor.form.set_value('name', 'Analytics')

        result = editor.submit()

        assert result.success is True
        assert nested_results[0].success is False
        assert nested_results[0].message == SUBMIT_PENDING_MESSAGE
        assert editor.is_pending is False

    def test_locked_parent_keeps_existing_value(self):
        upsert = RecordingUpsert()
        editor = _editor(category=_existing_category(parent_id=3, has_subcategories=True), upsert=upsert)

        editor.form.set_value('parent_id', None)
        editor.submit()

        assert editor.parent_locked is True
        assert upsert.calls[0]['parent_id'] == 3

    def test_category_tree_excludes_record_being_edited(self):
        categories = [
            {'id': 7, 'parent_id': None, 'full_path': 'analytics'},
            {'id': 8, 'parent_id': None, 'full_path': 'security'},
        ]
        editor = _editor(category=_existing_category(), categories=categories)

        assert [node['id'] for node in editor.category_tree] == [8]

    def test_custom_base_path(self):
        editor = _editor(base_path='/backoffice/categories/')
        editor.form.set_value('name', 'Security')

        assert editor.submit().redirect == '/backoffice/categories/security'
