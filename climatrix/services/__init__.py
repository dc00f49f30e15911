"""
Services Package

Auth, cache, weather proxy, AQI and seed-data services. Import the submodules
directly; this package does not re-export them so that ``extensions`` can load
the cache service without pulling in the models.
"""
