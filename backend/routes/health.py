# routes/health.py
from flask import Blueprint, jsonify
import logging
import time

logger = logging.getLogger(__name__)
health_bp = Blueprint('health', __name__)

@health_bp.route('/health', methods=['GET'])
def health_check():
    """Liveness check; the resolver holds no connections worth probing"""
    return jsonify({
        'status': 'healthy',
        'timestamp': time.time()
    }), 200
