"""
Quick test script for API endpoints
Run with: python test_endpoints.py
"""
import requests
import json

BASE_URL = "http://localhost:8000"

def test_health():
    print("\n=== Testing Health Endpoint ===")
    r = requests.get(f"{BASE_URL}/health")
    print(f"Status: {r.status_code}")
    print(f"Response: {r.json()}")
    return r.status_code == 200

def test_generate_message():
    print("\n=== Testing Message Generation ===")
    payload = {
        "naturalInput": "Desde Coruña Radio. Buque 'Aurora' MMSI 224123456 con 5 POB tiene una vía de agua en 43 21N 008 25W, caso coordinado por MRCC Finisterre"
    }
    r = requests.post(f"{BASE_URL}/api/generate-message", json=payload)
    print(f"Status: {r.status_code}")
    if r.status_code == 200:
        data = r.json()
        print(data["es"])
        print()
        print(data["en"])
    else:
        print(f"Error: {r.json()}")
    return r.status_code == 200

def test_empty_input():
    print("\n=== Testing Empty Input ===")
    r = requests.post(f"{BASE_URL}/api/generate-message", json={"naturalInput": ""})
    print(f"Status: {r.status_code}")
    print(f"Response: {r.json()}")
    return r.status_code == 400

def test_history():
    print("\n=== Testing History ===")
    r = requests.get(f"{BASE_URL}/api/history", params={"limit": 5})
    print(f"Status: {r.status_code}")
    if r.status_code == 200:
        data = r.json()
        print(f"Records: {len(data)}")
        if data:
            print(json.dumps(data[0], indent=2, ensure_ascii=False)[:500] + "...")
    return r.status_code == 200

def test_favorites():
    print("\n=== Testing Favorites ===")
    payload = {
        "title": "Plantilla de prueba",
        "naturalInput": "windsurfista en apuros",
        "spanishMessage": "MAYDAY RELAY (x3)",
        "englishMessage": "MAYDAY RELAY (x3)"
    }
    r = requests.post(f"{BASE_URL}/api/favorites", json=payload)
    print(f"Status: {r.status_code}")
    if r.status_code != 200:
        return False
    favorite_id = r.json()["id"]
    r = requests.delete(f"{BASE_URL}/api/favorites/{favorite_id}")
    print(f"Delete status: {r.status_code}")
    return r.status_code == 200

if __name__ == "__main__":
    print("=" * 50)
    print("API ENDPOINT TESTS")
    print("=" * 50)
    print("\nMake sure the backend is running at", BASE_URL)

    try:
        results = {
            "Health": test_health(),
            "Generate": test_generate_message(),
            "Empty input": test_empty_input(),
            "History": test_history(),
            "Favorites": test_favorites(),
        }

        print("\n" + "=" * 50)
        print("TEST RESULTS")
        print("=" * 50)
        for test, passed in results.items():
            status = "PASS" if passed else "FAIL"
            print(f"{test}: {status}")
    except requests.exceptions.ConnectionError:
        print("\nERROR: Cannot connect to backend. Make sure it's running!")
        print("Run: python -m uvicorn sosgen.main:app --reload")
