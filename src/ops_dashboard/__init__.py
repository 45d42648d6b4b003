"""
Ops Dashboard Package

Back office for a vehicle dealership and school-trip booking business:
- Dashboard metrics over current/previous periods with growth rates
- Cars, shops and service-provider management on Supabase
- Provider payouts and balances
- Explore catalog across every service table
- Localized (en/he/ae) booking summaries and contracts rendered to PDF

Main Components:
- domain/: metrics, pricing and validated input models
- adapters/: Supabase query helpers and the headless-browser PDF renderer
- services/: dashboard, payouts, explore, inventory and auth flows
- documents/: HTML templates for PDF export
- app.py: Streamlit operator UI (components/ and page/)

Usage:
    API: uvicorn backend.app.main:app
    UI:  streamlit run src/ops_dashboard/app.py
"""

__version__ = "0.1.0"
__author__ = "Ops Dashboard Team"
