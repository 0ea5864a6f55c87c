"""
Main entrypoint for the geocode client.

Usage:
    GEOCODE_API_KEY=<key> python main.py "1600 Amphitheatre Parkway, Mountain View, CA"

Prints the coordinates and address components of the first matching placemarks.
"""
import logging
import os
import sys

from src.geocoding.client import GeocodeClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)


def main(argv=None):
    """
    Geocode the address given on the command line.

    Returns:
        0 if the address was found, 1 otherwise
    """
    argv = sys.argv[1:] if argv is None else argv
    address = " ".join(argv).strip()
    if not address:
        print("Usage: python main.py <address>")
        return 1

    api_key = os.getenv("GEOCODE_API_KEY", "")
    if not api_key:
        logger.warning("GEOCODE_API_KEY is not set, the service will likely answer G_GEO_BAD_KEY")

    with GeocodeClient(api_key) as client:
        outcome = client.search(address)

    if not outcome.ok:
        print(f"Geocoding failed: {outcome.error} ({outcome.failure.value})")
        print(f"  Query URL: {outcome.query_url}")
        return 1

    result = outcome.result
    print(f"Address: {result.address}")
    print(f"  Latitude: {result.lat}")
    print(f"  Longitude: {result.lng}")
    print(f"  City: {result.city}")
    print(f"  State: {result.state}")
    print(f"  Zip: {result.zip}")
    return 0


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
