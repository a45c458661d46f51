"""
cloudcore_config: pre-startup validation of CloudCore configuration.

Loads a cloudcore.yaml into typed records and reports every invalid field
(ports, IP literals, TLS material, unix socket address, controller settings)
as a list of structured field errors.
"""

__version__ = "0.1.0"
