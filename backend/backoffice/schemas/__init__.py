from .category import CategorySchema, ComputedFieldsRequest, format_validation_errors

__all__ = [
    'CategorySchema',
    'ComputedFieldsRequest',
    'format_validation_errors',
]
