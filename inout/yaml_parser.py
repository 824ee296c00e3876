# inout/yaml_parser.py
import yaml
from typing import Dict, Any, Optional
from cerberus import Validator

from core.evaluation_types import AngleMode, Domain
from core.exceptions import ConfigError
from symbolic import constants as C
from utils.logging_config import get_logger

logger = get_logger(__name__)


def _domain_schema(lo: float, hi: float, steps: int, max_steps: int) -> Dict[str, Any]:
    return {
        'type': 'dict',
        'default': {},
        'schema': {
            'min': {'type': 'float', 'coerce': float, 'default': lo},
            'max': {'type': 'float', 'coerce': float, 'default': hi},
            'steps': {'type': 'integer', 'coerce': int, 'min': 2, 'max': max_steps, 'default': steps},
        },
    }


# Schema for a batch "job" file describing engine requests.
JOB_SCHEMA: Dict[str, Any] = {
    'mode': {
        'type': 'string',
        'allowed': ['degrees', 'radians'],
        'default': 'radians',
    },
    'plot': {
        'type': 'dict',
        'required': False,
        'schema': {
            'expression': {'type': 'string', 'default': C.DEFAULT_EXPRESSION},
            'domain': _domain_schema(C.DEFAULT_DOMAIN_MIN, C.DEFAULT_DOMAIN_MAX, C.DEFAULT_STEPS, C.MAX_STEPS),
            'bindings': {
                'type': 'dict',
                'default': {},
                'valuesrules': {'type': 'float', 'coerce': float},
            },
            'roots': {'type': 'boolean', 'default': False},
            'derivative': {'type': 'boolean', 'default': False},
            'tangent_x': {'type': 'number', 'nullable': True, 'default': None},
        },
    },
    'surface': {
        'type': 'dict',
        'required': False,
        'schema': {
            'expression': {'type': 'string', 'default': C.DEFAULT_SURFACE_EXPRESSION},
            'domain': _domain_schema(C.DEFAULT_SURFACE_MIN, C.DEFAULT_SURFACE_MAX,
                                     C.DEFAULT_SURFACE_STEPS, C.MAX_SURFACE_STEPS),
        },
    },
    'statistics': {
        'type': 'dict',
        'required': False,
        'schema': {
            'sample': {'type': 'string', 'nullable': True, 'default': None},
            'bins': {
                'type': 'integer',
                'coerce': int,
                'min': C.MIN_HISTOGRAM_BINS,
                'max': C.MAX_HISTOGRAM_BINS,
                'default': C.DEFAULT_HISTOGRAM_BINS,
            },
            'scatter': {'type': 'string', 'nullable': True, 'default': None},
            'normal': {
                'type': 'dict',
                'nullable': True,
                'default': None,
                'schema': {
                    'mean': {'type': 'float', 'coerce': float, 'default': C.DEFAULT_NORMAL_MEAN},
                    'std_dev': {'type': 'float', 'coerce': float, 'min': 1e-12,
                                'default': C.DEFAULT_NORMAL_STD},
                    'sample_size': {'type': 'integer', 'coerce': int, 'min': 1,
                                    'default': C.DEFAULT_NORMAL_SAMPLE_SIZE},
                },
            },
        },
    },
    'primes': {'type': 'integer', 'coerce': int, 'min': 0, 'required': False},
}


def validate_schema(data: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate job data against a schema and return the normalized document.

    Raises:
        ConfigError: If validation fails.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Job file must contain a mapping, got {type(data).__name__}")
    validator = Validator(schema)
    if not validator.validate(data):
        errors = validator.errors
        logger.error("YAML schema validation errors: %s", errors)
        raise ConfigError("YAML schema validation failed: " + str(errors))
    return validator.document


def domain_from_config(section: Dict[str, Any]) -> Domain:
    domain = section.get('domain', {})
    return Domain(domain['min'], domain['max'], domain['steps'])


def angle_mode_from_config(data: Dict[str, Any]) -> AngleMode:
    return AngleMode.from_value(data.get('mode', 'radians'))


def load_job(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Validate an already loaded job mapping (``None`` counts as an empty job)."""
    return validate_schema({} if data is None else data, JOB_SCHEMA)


def parse_job_config(yaml_file: str) -> Dict[str, Any]:
    """
    Parse and validate a YAML job file.
    """
    with open(yaml_file, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not read job file '{yaml_file}': {e}") from e
    return load_job(data)
