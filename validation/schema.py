"""
Schema validation for nested settings dictionaries.
"""
from typing import Any, Dict
from utils.logging_config import get_logger
from utils.exceptions import ValidationError
from .validators import ChoiceValidator

logger = get_logger(__name__)

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class Schema:
    """Schema for validating dictionaries."""
    
    def __init__(self, schema: Dict[str, Any], strict: bool = False):
        """
        Initialize schema.
        
        Args:
            schema: Dictionary defining expected structure. Values are a type,
                a nested ``Schema``, or a dict of rules (``type``, ``required``,
                ``default``, ``validator``).
            strict: If True, reject extra keys not in schema
        """
        self.schema = schema
        self.strict = strict
    
    def validate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Validate data against schema."""
        if not isinstance(data, dict):
            raise ValidationError(
                f"Expected dict, got {type(data)}",
                details={'actual_type': str(type(data))}
            )
        
        validated = {}
        errors = []
        
        for key, spec in self.schema.items():
            if key not in data:
                if isinstance(spec, Schema):
                    validated[key] = spec.validate({})
                    continue
                if isinstance(spec, dict) and not spec.get('required', True):
                    if 'default' in spec:
                        validated[key] = spec['default']
                    continue
                errors.append(f"Missing required field: {key}")
                continue
            
            try:
                validated[key] = self._validate_field(key, data[key], spec)
            except ValidationError as e:
                errors.append(f"Field '{key}': {e.message}")
                errors.extend(e.details.get('errors', []))
        
        if self.strict:
            extra_keys = set(data.keys()) - set(self.schema.keys())
            if extra_keys:
                errors.append(f"Unexpected fields: {sorted(extra_keys)}")
        else:
            for key in data:
                if key not in validated:
                    validated[key] = data[key]
        
        if errors:
            raise ValidationError(
                "Schema validation failed",
                details={'errors': errors}
            )
        
        return validated
    
    def _validate_field(self, key: str, value: Any, spec: Any) -> Any:
        """Validate a single field."""
        if isinstance(spec, Schema):
            return spec.validate(value)
        
        if isinstance(spec, type):
            if not isinstance(value, spec):
                raise ValidationError(
                    f"Expected {spec.__name__}, got {type(value).__name__}",
                    details={'expected': str(spec), 'actual': str(type(value))}
                )
            return value
        
        if isinstance(spec, dict):
            expected_type = spec.get('type')
            if expected_type and not isinstance(value, expected_type):
                raise ValidationError(
                    f"Expected {expected_type.__name__}, got {type(value).__name__}",
                    details={'expected': str(expected_type), 'actual': str(type(value))}
                )
            
            if 'validator' in spec:
                value = spec['validator'].validate(value)
            
            return value
        
        return value


class SettingsSchema(Schema):
    """Schema for the catalog settings tree."""
    
    def __init__(self):
        catalog = Schema({
            'docs_dir': {'type': str, 'required': True},
            'strict': {'type': bool, 'required': False, 'default': False},
        })
        logging_section = Schema({
            'log_level': {
                'type': str,
                'required': False,
                'default': 'WARNING',
                'validator': ChoiceValidator(LOG_LEVELS, name='log_level')
            },
            'log_dir': {'type': str, 'required': False, 'default': 'logs'},
            'enable_file': {'type': bool, 'required': False, 'default': False},
            'enable_structured': {'type': bool, 'required': False, 'default': False},
        })
        super().__init__({'catalog': catalog, 'logging': logging_section}, strict=False)
