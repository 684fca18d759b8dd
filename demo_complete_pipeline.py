#!/usr/bin/env python3
"""
Complete Pipeline Demo: Container → SLID → Container → QJSON → Snapshots

Shows the full workflow:
1. Build a container with positional, named and nested entries
2. Write it as SLID (plain, redacted, compact)
3. Parse the SLID back
4. Parse QJSON input
5. Export JSON/YAML snapshots
"""

from nanos import parse_qjson, parse_slid
from nanos.backends import RedactMode, generate_slid, save_slid_file
from nanos.examples import build_example_container
from nanos.serialization import container_to_json, container_to_yaml


def main():
    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: Container → SLID → Parse → QJSON → Snapshots")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Build Container
    # =========================================================================
    print("\n1. BUILDING CONTAINER...")
    record = build_example_container(job_count=3)
    print(f"   ✓ Keys: {list(record.keys())}")
    print(f"   ✓ Next index: {record.next}")
    print(f"   ✓ Locked id: {record.is_locked('id')}")
    print(f"   ✓ Redacted token: {record.is_redacted('token')}")

    # =========================================================================
    # STEP 2: Generate SLID
    # =========================================================================
    print("\n2. GENERATING SLID...")
    for mode in (RedactMode.OFF, RedactMode.ON, RedactMode.COMMENT):
        print(f"   [{mode.value}] {generate_slid(record, redact=mode)}")
    print(f"   [compact] {record.to_slid(compact=True)}")

    filename = "example_record.slid"
    save_slid_file(record, filename)
    print(f"   ✓ Saved {filename}")

    # =========================================================================
    # STEP 3: Parse SLID Back
    # =========================================================================
    print("\n3. PARSING SLID...")
    parsed = parse_slid(record.to_slid())
    print(f"   ✓ Same text after round trip: {parsed.to_slid() == record.to_slid()}")
    print(f"   ✓ First job status: {parsed.at([0, 'status'])}")

    # =========================================================================
    # STEP 4: QJSON
    # =========================================================================
    print("\n4. PARSING QJSON...")
    qjson = '{"name": "demo", "flags": [true, false, null] /* trailing comment */}'
    from_qjson = parse_qjson(qjson)
    print(f"   Input:  {qjson}")
    print(f"   Output: {from_qjson}")

    # =========================================================================
    # STEP 5: Snapshots
    # =========================================================================
    print("\n5. SNAPSHOTS:")
    print("-" * 80)
    print(f"   JSON: {container_to_json(parsed)}")
    print("   YAML:")
    for line in container_to_yaml(parsed).splitlines()[:15]:
        print(f"      {line}")

    print("\n" + "=" * 80)
    print("✓ PIPELINE COMPLETE")
    print("=" * 80)


if __name__ == "__main__":
    main()
