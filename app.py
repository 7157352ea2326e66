# /app.py

from dxh_reagent import app
from dxh_reagent.catalog import PRODUCT_CODES
from dxh_reagent.validation import ReagentParams, generate_reagent_data

@app.shell_context_processor
def make_shell_context():
    """Create a shell context for the application -
    for trying out label generation in the Flask shell"""
    return {
        'ReagentParams': ReagentParams,
        'generate_reagent_data': generate_reagent_data,
        'PRODUCT_CODES': PRODUCT_CODES,
    }
