"""
Brellò Sales & Finance Cockpit - motore di calcolo.

Dashboard KPI dei lotti, Preventivatore e simulatore di scenari per la
vendita di spazi pubblicitari su ombrelli e sponsorship di stazioni.
"""

__version__ = "1.0.0"
