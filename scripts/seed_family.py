"""Script to seed a running archive with the sample family and print the tree"""
import requests
import sys
import time

API_BASE_URL = "http://localhost:8000/api"


def seed():
    """Ask the server to replace its contents with the sample family"""
    print("\nSeeding sample family...")

    response = requests.post(f"{API_BASE_URL}/seed")

    if response.status_code == 200:
        stats = response.json().get("stats", {})
        print(f"✓ Seeded {stats.get('members', 0)} members, {stats.get('relationships', 0)} relationship edges")
        return True

    print(f"✗ Error: {response.status_code}")
    print(response.text)
    return False


def audit(repair: bool):
    """Queue a symmetry audit and poll until the worker reports back"""
    response = requests.post(f"{API_BASE_URL}/relationships/audit", params={"repair": repair})
    if response.status_code != 200:
        print(f"✗ Could not queue audit: {response.status_code}")
        return None

    job_id = response.json()["jobId"]
    print(f"Audit job {job_id} queued")

    for _ in range(30):
        status = requests.get(f"{API_BASE_URL}/jobs/{job_id}").json()
        if status["status"] in ("completed", "failed"):
            return status
        time.sleep(2)

    print("✗ Timeout waiting for the audit worker")
    return None


def print_tree():
    response = requests.get(f"{API_BASE_URL}/family-members")
    response.raise_for_status()
    members = response.json()

    print(f"\nFound {len(members)} family members:\n")
    for member in members:
        born = member["birthDate"] or "unknown"
        print(f"👤 {member['firstName']} {member['lastName']} (born {born})")
        for rel in member["relationships"]:
            related = rel["relatedPerson"] or {}
            print(f"   {rel['relationType']}: {related.get('firstName', '?')} {related.get('lastName', '')}")
        for event in member["timelineEvents"]:
            print(f"   • {event['eventDate']} {event['title']}")


def main():
    print("=" * 60)
    print("FAMILY TREE ARCHIVE - SAMPLE DATA LOADER")
    print("=" * 60)

    if not seed():
        sys.exit(1)

    print_tree()

    if "--audit" in sys.argv:
        status = audit(repair="--repair" in sys.argv)
        if status:
            result = status.get("resultData") or {}
            print(f"\nAudit {status['status']}: {result.get('asymmetric_edges', 0)} asymmetric edge(s), "
                  f"{result.get('repaired', 0)} repaired")


if __name__ == "__main__":
    main()
