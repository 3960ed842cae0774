#!/usr/bin/env python3
# =============================================================================
# scripts/check_public_site.py - Public Portfolio Smoke Check
# =============================================================================
# Fetches everything the public site renders and prints a short summary.
# Exits non-zero if the profile is missing or any request fails.
#
# Usage:
#   python scripts/check_public_site.py
#   python scripts/check_public_site.py --base-url https://api.me.dev
#
# Environment (.env):
#   PORTFOLIO_API_URL   - API origin (default: http://localhost:8000)
#   PORTFOLIO_TOKEN     - Optional access token to also check /api/profile
# =============================================================================

import argparse
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from lib.portfolio_client import PortfolioClient, PortfolioClientError


def main() -> int:
    parser = argparse.ArgumentParser(description="Check the public portfolio endpoints")
    parser.add_argument(
        "--base-url",
        default=os.getenv("PORTFOLIO_API_URL", "http://localhost:8000"),
        help="API origin",
    )
    parser.add_argument("--profile-id", default=None, help="Profile to check (default: first)")
    args = parser.parse_args()

    print(f"{'='*60}")
    print(f"Checking {args.base_url}")
    print(f"{'='*60}")

    with PortfolioClient(args.base_url, access_token=os.getenv("PORTFOLIO_TOKEN")) as client:
        try:
            profile = client.public_profile(args.profile_id)
            if profile is None:
                print("❌ No public profile found")
                return 1

            print(f"✅ Profile: {profile['name']} ({profile.get('headline') or 'no headline'})")

            sections = {
                "Education": client.public_education(args.profile_id),
                "Experience": client.public_experience(args.profile_id),
                "Skills": client.public_skills(args.profile_id),
                "Projects": client.public_projects(args.profile_id),
            }
            for name, rows in sections.items():
                print(f"✅ {name}: {len(rows)} record(s)")

            if os.getenv("PORTFOLIO_TOKEN"):
                mine = client.my_profile()
                print(f"✅ Dashboard profile: {'found' if mine else 'not created yet'}")

        except PortfolioClientError as e:
            print(f"❌ {e}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
