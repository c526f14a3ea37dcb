"""satlook Live Tracking: refresh an OMM satellite's position every 2 seconds.

Submits an OMM-KVN message to a tracking session, runs live updates for a
few ticks, then pins the time to the element epoch.
"""

import asyncio
import logging

from satlook import PositionResult, TrackingSession
from satlook.utils.formatting import format_dec, format_ra

OMM_KVN = """
CCSDS_OMM_VERS = 2.0
OBJECT_NAME = ISS (ZARYA)
OBJECT_ID = 1998-067A
EPOCH = 2024-02-14T13:10:30.160416
MEAN_MOTION = 15.49583488
ECCENTRICITY = .0004948
INCLINATION = 51.6412
RA_OF_ASC_NODE = 207.4925
ARG_OF_PERICENTER = 290.5508
MEAN_ANOMALY = 178.9792
NORAD_CAT_ID = 25544
BSTAR = .00030093
MEAN_MOTION_DOT = .00016717
MEAN_MOTION_DDOT = 0
"""


def show(result: PositionResult) -> None:
    print(
        f"{result.timestamp:%Y-%m-%d %H:%M:%S} | "
        f"az {result.azimuth:7.2f}° el {result.elevation:6.2f}° | "
        f"RA {format_ra(result.right_ascension)} DEC {format_dec(result.declination)}"
    )


async def main() -> None:
    session = TrackingSession()
    submission = session.submit(OMM_KVN)
    if not submission.ok:
        print(f"Error: {submission.message}")
        return

    print(f"Tracking {submission.tracker.name} from {session.context.observer.describe()}")
    scheduler = session.scheduler
    scheduler.start()
    for _ in range(3):
        await asyncio.sleep(scheduler.interval)
        if scheduler.latest is not None:
            show(scheduler.latest)

    session.use_fixed_time(submission.tracker.elements.epoch)
    print("At epoch:")
    show(scheduler.latest)
    session.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    asyncio.run(main())
