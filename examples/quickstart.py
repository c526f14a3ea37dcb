"""satlook Quickstart: where is the ISS from Mt Abu at a given instant?"""

from datetime import datetime, timezone

from satlook import TimeSelector, TrackingContext, Tracker, DEFAULT_OBSERVER
from satlook.utils.formatting import format_dec, format_ra

# ISS (ZARYA) TLE
tle_text = """
ISS (ZARYA)
1 25544U 98067A   24045.54896019  .00016717  00000-0  30093-3 0  9993
2 25544  51.6412 207.4925 0004948 290.5508 178.9792 15.49583488439596
""".strip()

tracker = Tracker.from_text(tle_text)
iss = tracker.elements

print(f"Satellite: {iss.name}")
print(f"NORAD ID:  {iss.norad_id}")
print(f"Epoch:     {iss.epoch}")
print(f"Incl:      {iss.inclination_deg:.4f}°")
print(f"Ecc:       {iss.eccentricity:.7f}")
print(f"Period:    {iss.period_minutes:.1f} min")

context = TrackingContext(observer=DEFAULT_OBSERVER, time=TimeSelector.at(datetime(2024, 2, 14, 14, 0, tzinfo=timezone.utc)))
result = tracker.compute(context.observer, context.time.resolve())

print()
print(f"Observer:  {context.observer.describe()}")
print(f"Azimuth:   {result.azimuth:.2f}°")
print(f"Elevation: {result.elevation:.2f}°")
print(f"Range:     {result.range_km:.1f} km")
print(f"RA:        {format_ra(result.right_ascension)}")
print(f"DEC:       {format_dec(result.declination)}")
print(f"Sub-point: {result.geodetic.latitude:.3f}, {result.geodetic.longitude:.3f} @ {result.geodetic.height:.1f} km")
