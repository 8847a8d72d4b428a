"""
HTTP API server for the workshop scheduler.

This module provides a Flask-based REST API that receives job lists
and returns machine schedules.
"""

from flask import Flask, request, jsonify
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from . import __version__
from .types import Policy, ScheduleRequest, ScheduleResponse
from .errors import ValidationError
from .algorithm import check_machine_count, run_request
from .loader import parse_import_text
from .validation import build_jobs


logger = logging.getLogger(__name__)

LOG_FORMAT = '[%(asctime)s] %(levelname)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging for the server and CLI entry points."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT
    )


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Create and configure the Flask application.

    Configuration is applied in order: defaults, WORKSHOP_SCHEDULER_*
    environment variables, then the config argument.

    Args:
        config: Optional configuration dictionary

    Returns:
        Configured Flask app

    Raises:
        ValueError: if the default policy or machine count is invalid
    """
    app = Flask(__name__)

    # Default configuration
    app.config.update({
        'TESTING': False,
        'DEFAULT_POLICY': Policy.BY_PRIORITY.value,
        'DEFAULT_MACHINE_COUNT': 1,
        'MAX_MACHINE_COUNT': 64,
        'MAX_JOBS': 1000,
    })
    app.config.from_prefixed_env('WORKSHOP_SCHEDULER')

    # Apply custom config
    if config:
        app.config.update(config)

    default_policy = Policy.parse(app.config['DEFAULT_POLICY'])
    default_machine_count = app.config['DEFAULT_MACHINE_COUNT']
    check_machine_count(default_machine_count)

    def resolve_request(
        rows: List[Any],
        policy_value: Any,
        machine_value: Any
    ) -> Dict[str, Any]:
        """Validate a request and run the scheduler on it."""
        if len(rows) > app.config['MAX_JOBS']:
            raise ValidationError(
                f"too many jobs: {len(rows)} (limit {app.config['MAX_JOBS']})"
            )

        try:
            policy = (
                default_policy if policy_value is None
                else Policy.parse(policy_value)
            )
        except ValueError as e:
            raise ValidationError(str(e)) from None

        machine_count = (
            default_machine_count if machine_value is None else machine_value
        )
        if isinstance(machine_count, str) and machine_count.strip().isdigit():
            machine_count = int(machine_count)
        check_machine_count(machine_count)
        if machine_count > app.config['MAX_MACHINE_COUNT']:
            raise ValidationError(
                f"too many machines: {machine_count} "
                f"(limit {app.config['MAX_MACHINE_COUNT']})"
            )

        schedule_request = ScheduleRequest(
            jobs=build_jobs(rows),
            policy=policy,
            machine_count=machine_count
        )
        response = run_request(schedule_request)

        logger.info(
            f"Scheduled {len(response.schedule)} jobs on {machine_count} machines "
            f"using {policy.value}"
        )
        logger.info(f"Metrics: {response.metrics}")

        return build_response(schedule_request, response)

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'service': 'workshop-scheduler',
            'version': __version__,
            'timestamp': datetime.now(timezone.utc).isoformat()
        })

    @app.route('/policies', methods=['GET'])
    def get_policies():
        """List the available ordering policies."""
        return jsonify({
            'policies': [
                {'id': p.id, 'name': p.label, 'value': p.value}
                for p in Policy
            ],
            'default': default_policy.value,
            'default_machine_count': default_machine_count
        })

    @app.route('/schedule', methods=['POST'])
    def schedule_jobs():
        """
        Schedule jobs across parallel machines.

        Request body:
        {
            "policy": "shortest_job_first",
            "machine_count": 2,
            "jobs": [
                {"name": "Lathe", "duration": 5, "priority": 3, "deadline": 10},
                ["Drill", "3", "1", "4"]
            ]
        }

        Response:
        {
            "type": "schedule_response",
            "policy": "shortest_job_first",
            "machine_count": 2,
            "schedule": [
                {
                    "job_id": 1,
                    "name": "Drill",
                    "start_time": 0,
                    "end_time": 3,
                    "machine_id": 0,
                    "deadline": 4,
                    "late": false
                }
            ],
            "metrics": {...}
        }
        """
        data = request.get_json(silent=True)

        if not data:
            return jsonify({'error': 'Empty request body'}), 400
        if not isinstance(data, dict):
            return jsonify({'error': 'Request body must be a JSON object'}), 400

        rows = data.get('jobs', [])
        if not isinstance(rows, list):
            return jsonify({'error': 'jobs must be a list'}), 400

        return jsonify(resolve_request(
            rows,
            data.get('policy'),
            data.get('machine_count')
        )), 200

    @app.route('/import', methods=['POST'])
    def import_jobs():
        """
        Schedule jobs given in the semicolon-delimited import format.

        The body is plain text; policy and machines are query parameters.
        """
        text = request.get_data(as_text=True)
        rows = parse_import_text(text)

        return jsonify(resolve_request(
            rows,
            request.args.get('policy'),
            request.args.get('machines')
        )), 200

    @app.errorhandler(ValidationError)
    def invalid_input(error):
        """Handle rejected input."""
        logger.error(f"Invalid input: {error}")
        return jsonify({'error': str(error), 'row': error.row}), 400

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Internal server error: {error}", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500

    return app


def build_response(
    schedule_request: ScheduleRequest,
    response: ScheduleResponse
) -> Dict[str, Any]:
    return {
        'type': 'schedule_response',
        'policy': schedule_request.policy.value,
        'machine_count': schedule_request.machine_count,
        'schedule': [s.to_dict() for s in response.schedule],
        'metrics': response.metrics
    }


def run_server(host: str = '0.0.0.0', port: int = 8001, debug: bool = False):
    """
    Run the scheduler HTTP server.

    Args:
        host: Host to bind to
        port: Port to listen on
        debug: Enable debug mode
    """
    configure_logging(logging.DEBUG if debug else logging.INFO)

    logger.info("=" * 50)
    logger.info("  Workshop Scheduler Server")
    logger.info("=" * 50)
    logger.info("")
    logger.info(f"Starting server on {host}:{port}")
    logger.info("")
    logger.info("Endpoints:")
    logger.info(f"  POST {host}:{port}/schedule - Schedule jobs (JSON)")
    logger.info(f"  POST {host}:{port}/import   - Schedule jobs (import text)")
    logger.info(f"  GET  {host}:{port}/policies - List policies")
    logger.info(f"  GET  {host}:{port}/health   - Health check")
    logger.info("")

    app = create_app()
    app.run(host=host, port=port, debug=debug)


if __name__ == '__main__':
    run_server()
