"""
Upstream API integrations (GlobalAPI, SchnoseAPI).

Each upstream service exposes a `Protocol` describing what the rest of the
library needs from it, plus an HTTP implementation backed by `requests`.
"""
