#!/usr/bin/env python3
"""
Exercise the exam scheduler API against a running server.
"""

import requests

BASE_URL = "http://localhost:8000"


def main():
    """Schedule midterms through the API and print the conflict audit."""
    print("Testing Exam Scheduler API...")
    print("=" * 60)

    print("\n1. Testing health check...")
    try:
        response = requests.get(f"{BASE_URL}/health", timeout=5)
        if response.status_code == 200:
            print("✓ Server is healthy")
        else:
            print(f"✗ Health check failed: {response.status_code}")
            return
    except requests.exceptions.ConnectionError:
        print(
            "✗ Cannot connect to server. Make sure the server is running on localhost:8000"
        )
        return

    print("\n2. Scheduling midterm exams...")
    try:
        response = requests.post(
            f"{BASE_URL}/schedule",
            json={"semester_start": "2024-10-01", "exam_type": "midterm"},
            timeout=60,
        )
        if response.status_code != 200:
            print(f"✗ Scheduling failed: {response.status_code}")
            print(f"Error: {response.text}")
            return
        result = response.json()
        print(f"✓ Scheduled {len(result['newExams'])} exams")
        for exam in result["newExams"]:
            print(
                f"    - {exam['courseCode']}: {exam['instructor']} in {exam['room']} "
                f"({exam['seatColor']}) on {exam['date']} {exam['time']}"
            )
        for item in result["unscheduledCourses"]:
            print(f"    ! {item['course']['code']}: {item['reason']}")
    except requests.exceptions.Timeout:
        print("✗ Request timed out")
        return

    print("\n3. Auditing conflicts...")
    try:
        response = requests.get(f"{BASE_URL}/conflicts", timeout=10)
        if response.status_code == 200:
            report = response.json()
            for category in ("room", "instructor", "student"):
                print(f"✓ {category}: {len(report[category])} conflicts")
        else:
            print(f"✗ Failed to audit conflicts: {response.status_code}")
    except requests.exceptions.Timeout:
        print("✗ Request timed out")

    print("\n4. Schedule statistics...")
    try:
        response = requests.get(f"{BASE_URL}/statistics", timeout=5)
        if response.status_code == 200:
            stats = response.json()
            print(f"✓ {stats['totalExams']} exams in {stats['roomsUsed']} rooms")
        else:
            print(f"✗ Failed to get statistics: {response.status_code}")
    except requests.exceptions.Timeout:
        print("✗ Request timed out")

    print("\n" + "=" * 60)
    print("Test completed!")


if __name__ == "__main__":
    main()
