"""
Results export endpoint.

Serves the final squads as a downloadable JSON document.
"""

import json

from flask import Response

from app.export import build_results, export_filename
from app.logger import log_audit
from app.routes import api_bp
from app.services.auction_service import auction_service


@api_bp.route('/results/export')
def export_results():
    """Per-team results as a JSON attachment."""
    state = auction_service.load_state()
    results = build_results(state.teams)
    filename = export_filename()
    log_audit('results_exported', 'auction', details={'teams': len(results)})
    return Response(
        json.dumps(results, indent=2),
        mimetype='application/json',
        headers={'Content-Disposition': f'attachment; filename={filename}'},
    )
