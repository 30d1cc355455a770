#!/usr/bin/env python3
# ================================
# SIMPLE API TEST RUNNER
# ================================

import requests
import sys
import time
import os
from decimal import Decimal
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Configuration from .env
BASE_URL = os.getenv("TEST_BASE_URL", "http://localhost:8000")
TIMEOUT = int(os.getenv("TEST_TIMEOUT", "5"))

def test_server_running():
    """Test if server is running."""
    try:
        response = requests.get(f"{BASE_URL}/health", timeout=TIMEOUT)
    except requests.exceptions.RequestException:
        print("❌ Server is not running. Start with: uvicorn app.main:app --reload")
        return False

    if response.status_code != 200:
        print(f"❌ Health check failed: {response.status_code}")
        return False
    print(f"✅ Server is running ({response.json()['service']})")
    return True

def test_catalogue():
    """Test catalogue endpoint."""
    response = requests.get(f"{BASE_URL}/api/v1/pricing/catalogue", timeout=TIMEOUT)

    if response.status_code == 200:
        data = response.json()
        print(f"✅ Catalogue: {len(data['units'])} Mietfächer, {len(data['addons'])} add-ons")
        return True
    print(f"❌ Catalogue failed: {response.status_code}")
    return False

def test_price_calculation():
    """Test price calculation with a 12-month discount."""
    selection = {
        "unit_counts": {"block-a": 2, "block-cold": 1},
        "selected_addon_ids": ["window-small"],
        "rental_duration_months": 12
    }
    start_time = time.time()
    response = requests.post(f"{BASE_URL}/api/v1/pricing/calculate", json=selection, timeout=TIMEOUT)
    end_time = time.time()

    if response.status_code != 200:
        print(f"❌ Price calculation failed: {response.status_code}")
        return False

    total = Decimal(response.json()["breakdown"]["monthly_total"])
    if total != Decimal("135"):
        print(f"❌ Price calculation returned {total}, expected 135")
        return False
    print(f"✅ Price calculation: {response.json()['formatted']['monthly_total_display']} in {end_time-start_time:.3f}s")
    return True

def test_trial_state():
    """Test trial state for the last day of the trial."""
    payload = {
        "trial_window": {
            "trial_start_date": "2025-09-01T10:00:00Z",
            "trial_end_date": "2025-10-01T10:00:00Z"
        },
        "now": "2025-09-30T22:00:00Z"
    }
    response = requests.post(f"{BASE_URL}/api/v1/trials/state", json=payload, timeout=TIMEOUT)

    if response.status_code == 200 and response.json()["phase"] == "last_day":
        print("✅ Trial state: last_day")
        return True
    print(f"❌ Trial state failed: {response.status_code} - {response.text}")
    return False

def test_invalid_transition():
    """Test that skipping a booking status is rejected."""
    payload = {
        "booking": {"id": "smoke", "status": "pending", "requested_at": "2025-09-01T08:00:00Z"},
        "target_status": "completed"
    }
    response = requests.post(f"{BASE_URL}/api/v1/bookings/transition", json=payload, timeout=TIMEOUT)

    if response.status_code == 409:
        print("✅ Invalid transition rejected with 409")
        return True
    print(f"❌ Invalid transition returned {response.status_code}")
    return False

def main():
    """Run all API tests."""
    print("🔄 Starting API Tests...")
    print(f"Target: {BASE_URL}")
    print("-" * 50)

    if not test_server_running():
        sys.exit(1)

    checks = [test_catalogue, test_price_calculation, test_trial_state, test_invalid_transition]
    tests_passed = sum(1 for check in checks if check())
    tests_total = len(checks)

    # Summary
    print("-" * 50)
    print(f"📊 Test Results: {tests_passed}/{tests_total} passed")

    if tests_passed == tests_total:
        print("🎉 All tests passed!")
    else:
        print("⚠️  Some tests failed. Check the output above.")
        sys.exit(1)

if __name__ == "__main__":
    main()
