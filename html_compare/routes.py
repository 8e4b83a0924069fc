"""
HTML Comparison Flask Routes
============================
API endpoints for HTML document comparison.

v1.0.0: Initial implementation with diff, render and health endpoints
"""

import time
from functools import wraps
from flask import Blueprint, request, jsonify, g
from werkzeug.exceptions import BadRequest

from config_logging import (
    get_logger, get_config, VERSION,
    ValidationError, ProcessingError
)

from .comparator import HtmlComparator
from .renderer import render_html_differences

logger = get_logger('html_compare')

hc_blueprint = Blueprint('html_compare', __name__)


# =============================================================================
# STANDARDIZED ERROR HANDLING DECORATOR
# =============================================================================

def _error_response(code: str, message: str, status: int):
    return jsonify({
        'success': False,
        'error': {
            'code': code,
            'message': message,
            'correlation_id': getattr(g, 'correlation_id', 'unknown')
        }
    }), status


def handle_hc_errors(f):
    """
    Decorator for standardized API error handling in comparison routes.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        start_time = time.time()
        try:
            result = f(*args, **kwargs)

            elapsed = time.time() - start_time
            if elapsed > 5.0:
                logger.warning(f"Slow HC API call: {f.__name__} took {elapsed:.1f}s")

            return result

        except ValidationError as e:
            logger.warning(f"Validation error in {f.__name__}: {e}")
            return _error_response('VALIDATION_ERROR', str(e), 400)
        except ProcessingError as e:
            logger.error(f"Processing error in {f.__name__}: {e}")
            return _error_response('PROCESSING_ERROR', str(e), 500)
        except BadRequest as e:
            logger.warning(f"Invalid JSON in {f.__name__}: {e}")
            return _error_response('INVALID_JSON', f'Invalid JSON format: {e.description}', 400)
        except Exception as e:
            logger.exception(f"Unexpected error in {f.__name__}: {e}")
            return _error_response('INTERNAL_ERROR', 'An unexpected error occurred', 500)

    return decorated


def _get_json_body() -> dict:
    data = request.get_json(force=True, silent=False)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _optional_html(data: dict, key: str):
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"'{key}' must be a string or null", field=key)
    return value


# =============================================================================
# API ENDPOINTS
# =============================================================================

@hc_blueprint.route('/diff', methods=['POST'])
@handle_hc_errors
def compute_diff():
    """
    Compare two HTML documents and return the highlighted modified document.

    Request body:
        { left: str|null, right: str|null, include_units?: bool }

    Returns:
        {
            success: true,
            result: {
                left_diffs: [],
                right_diffs: [{ content, type: 'modified' }],
                summary: { additions, deletions, changes },
                detailed: { lines: [], tables: [], images: [] },
                units?: [...]
            }
        }
    """
    data = _get_json_body()
    left = _optional_html(data, 'left')
    right = _optional_html(data, 'right')
    include_units = data.get('include_units', False)
    if not isinstance(include_units, bool):
        raise ValidationError("'include_units' must be a boolean", field='include_units')

    result = HtmlComparator().compare(left, right)

    logger.info(f"Computed HTML diff: {result.summary.changes} changes",
                changes=result.summary.changes)

    return jsonify({
        'success': True,
        'result': result.to_dict(include_units=include_units)
    })


@hc_blueprint.route('/render', methods=['POST'])
@handle_hc_errors
def render_diffs():
    """
    Join rendered diff fragments into one HTML string.

    Request body:
        { diffs: [{ content, type }] }
    """
    data = _get_json_body()
    diffs = data.get('diffs') or []
    if not isinstance(diffs, list):
        raise ValidationError("'diffs' must be a list", field='diffs')
    if not all(isinstance(d, dict) for d in diffs):
        raise ValidationError("Each diff must be an object", field='diffs')

    return jsonify({
        'success': True,
        'html': render_html_differences(diffs)
    })


@hc_blueprint.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    config = get_config()
    return jsonify({
        'success': True,
        'module': 'html_compare',
        'version': VERSION,
        'status': 'healthy',
        'parser': config.html_parser,
        'semantic_cleanup': config.semantic_cleanup
    })
