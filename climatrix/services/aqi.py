"""
AQI Calculation Services

EPA-style AQI from a PM2.5 concentration.
"""

# (upper PM2.5 bound in µg/m³, AQI low, AQI high), lower bound is the previous upper
PM25_BREAKPOINTS = [
    (12.0, 0, 50),
    (35.4, 51, 100),
    (55.4, 101, 150),
    (150.4, 151, 200),
    (250.4, 201, 300),
    (350.4, 301, 400),
    (500.4, 401, 500),
]


def calculate_aqi(pm25):
    """Calculate AQI from PM2.5 value using EPA formula"""
    bp_lo = 0.0
    for bp_hi, aqi_lo, aqi_hi in PM25_BREAKPOINTS:
        if pm25 <= bp_hi:
            aqi = ((aqi_hi - aqi_lo) / (bp_hi - bp_lo)) * (pm25 - bp_lo) + aqi_lo
            return int(round(aqi))
        bp_lo = bp_hi + 0.1

    return 500
