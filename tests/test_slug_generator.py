"""Tests for slug helpers."""

import pytest

from backoffice.models import Category
from backoffice.utils.slug_generator import RESERVED_SLUGS, generate_unique_slug, slugify


class TestSlugify:

    @pytest.mark.parametrize('text, expected', [
        ('Open Source', 'open-source'),
        ('  Developer   Tools  ', 'developer-tools'),
        ('CI/CD', 'cicd'),
        ('Café Apps', 'cafe-apps'),
        ('snake_case_name', 'snake-case-name'),
        ('--Already--dashed--', 'already-dashed'),
        ('', ''),
    ])
    def test_slugify(self, text, expected):
        assert slugify(text) == expected

    def test_chinese_text_is_transliterated(self):
        assert slugify('工具') == 'gong-ju'


class TestGenerateUniqueSlug:

    def test_returns_base_slug_when_free(self, app):
        assert generate_unique_slug('Open Source', Category) == 'open-source'

    def test_appends_counter_when_taken(self, make_category):
        make_category('Open Source')
        make_category('Open Source 1', slug='open-source-1')

        assert generate_unique_slug('Open Source', Category) == 'open-source-2'

    def test_excludes_record_being_updated(self, make_category):
        category = make_category('Open Source')

        assert generate_unique_slug('Open Source', Category, exclude_id=category.id) == 'open-source'

    def test_reserved_route_names_get_a_suffix(self, app):
        assert 'new' in RESERVED_SLUGS
        assert generate_unique_slug('New', Category) == 'new-1'
        assert generate_unique_slug('Computed Fields', Category) == 'computed-fields-1'
