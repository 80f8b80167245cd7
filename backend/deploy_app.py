"""
Flask REST API for the Deployment Artifacts Report

Endpoints:
  GET /api/deployments/<id>/artifacts      - Text report (or raw JSON with ?json=true)
  GET /api/deployments/<id>/artifacts.pdf  - PDF report
  GET /api/health                          - Health check
"""
from datetime import datetime
from flask import Flask, Response, request, jsonify, send_file
from flask_cors import CORS
import logging

from deploy_config import get_config, setup_logging
from deploy_models import PresentationMode, StyleConfig
from pdf_generator import generate_pdf_report
from report_renderer import render_report
from salesforce_client import (
    DeployStatusError,
    fetch_deploy_result,
    normalize_deployment_id,
    sf_login_from_config,
)

setup_logging()
logger = logging.getLogger(__name__)


# Initialize Flask app
app = Flask(__name__)
CORS(app)  # Allow frontend to call this API


def _flag(name, default=False):
    """Read a boolean query parameter (?summary=true)"""
    value = request.args.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('true', '1', 'yes', 'on', '')


def _load_deploy_result(deployment_id):
    """
    Validate id -> log in -> fetch.
    Returns (deploy_result, None) or (None, error_response).
    """
    try:
        deployment_id = normalize_deployment_id(deployment_id)
    except ValueError as e:
        return None, (jsonify({"error": str(e)}), 400)

    try:
        sf = sf_login_from_config()
    except RuntimeError as e:
        logger.warning("Salesforce login failed: %s", e)
        return None, (jsonify({"error": str(e)}), 401)

    try:
        return fetch_deploy_result(sf, deployment_id), None
    except DeployStatusError as e:
        logger.warning("Deploy status fetch failed: %s", e)
        return None, (jsonify({"error": str(e)}), 502)


@app.route('/api/deployments/<deployment_id>/artifacts', methods=['GET'])
def deployment_artifacts(deployment_id):
    """
    Display the artifacts associated with a specific deployment

    Query parameters:
        summary   - only component counts per type
        json      - the raw deploy result instead of the text report
        nocolors  - defaults to true here; ANSI colors rarely make sense over HTTP
        noglyphs  - no check/cross glyphs
    """
    try:
        deploy_result, error = _load_deploy_result(deployment_id)
        if error:
            return error

        mode = PresentationMode.from_flags(summary=_flag('summary'), raw=_flag('json'))
        if mode is PresentationMode.RAW:
            return jsonify(deploy_result)

        style = StyleConfig.resolve(colors=not _flag('nocolors', True), glyphs=not _flag('noglyphs'))
        lines = render_report(deploy_result, deployment_id.strip(), mode, style)
        return Response("\n".join(lines) + "\n", mimetype='text/plain')

    except Exception as e:
        logger.exception("Artifacts report failed for %s", deployment_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@app.route('/api/deployments/<deployment_id>/artifacts.pdf', methods=['GET'])
def deployment_artifacts_pdf(deployment_id):
    """Generate and download PDF report"""
    try:
        deploy_result, error = _load_deploy_result(deployment_id)
        if error:
            return error

        pdf_file = generate_pdf_report(deploy_result, deployment_id.strip(), summary_only=_flag('summary'))

        filename = f"deployment_{deployment_id.strip()}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.pdf"
        return send_file(
            pdf_file,
            mimetype='application/pdf',
            as_attachment=True,
            download_name=filename
        )

    except Exception as e:
        logger.exception("PDF report failed for %s", deployment_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@app.route('/api/health', methods=['GET'])
def health_check():
    """
    Health check endpoint

    Returns:
        JSON with status
    """
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat()
    })


if __name__ == '__main__':
    cfg = get_config()
    print("=" * 60)
    print("Deployment Artifacts Report API")
    print("=" * 60)
    print(f"Starting server on http://{cfg.APP_HOST}:{cfg.APP_PORT}")
    print()
    print("Available endpoints:")
    print("  GET /api/health")
    print("  GET /api/deployments/<id>/artifacts")
    print("  GET /api/deployments/<id>/artifacts.pdf")
    print("=" * 60)
    app.run(host=cfg.APP_HOST, port=cfg.APP_PORT)
