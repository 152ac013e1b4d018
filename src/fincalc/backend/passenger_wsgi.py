"""WSGI entrypoint for Passenger-style hosting of the FinCalc backend."""

from fincalc.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
