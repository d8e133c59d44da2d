"""Dati dimostrativi del cockpit Brellò."""

from brello_cockpit.demo.dati_demo import DatiDemo, genera_dati_demo
