"""Example: Frames of reference around Montréal.

This example walks through the geoframes conversions and transforms:
1. Convert a geodetic position (LLA) to ECEF on two datums
2. Express McGill University in the ENU frame of Polytechnique Montréal
3. Compare the ENU offset with surface distances and Earth curvature
4. Project onto UTM
5. Chain a sensor measurement through vehicle and local frames to ECEF
"""

import numpy as np

from geoframes import (
    LLA,
    Spherical,
    chord_distance,
    curvature_drop,
    distance,
    enu_from_lla,
    osgb36,
    rot_zyx,
    sensor_to_ecef_pipeline,
    to_ecef,
    to_enu,
    to_lla,
    to_utmz,
    wgs84,
)


def main() -> None:
    """Run the frames of reference walkthrough."""
    print("=" * 70)
    print("Frames of Reference")
    print("=" * 70)

    poly = LLA(45.50439, -73.61288, 159.0)
    mcgill = LLA(45.5047847, -73.5771511, 47.9)
    quebec = LLA(46.829853, -71.254028, 74.0)

    # Example 1: LLA to ECEF on two datums
    print("\n1. LLA to ECEF")
    print("-" * 70)
    print(f"Polytechnique Montréal: {poly}")
    for datum in (wgs84, osgb36):
        ecef = to_ecef(poly, datum)
        print(f"  {datum.name:>7}: X={ecef.x:,.2f} m  Y={ecef.y:,.2f} m  Z={ecef.z:,.2f} m")

    back = to_lla(to_ecef(poly, wgs84), wgs84)
    print(f"  Round trip (wgs84): {back}")

    # Example 2: Local ENU frame
    print("\n2. McGill in the ENU frame of Polytechnique")
    print("-" * 70)
    enu = to_enu(mcgill, poly, wgs84)
    print(f"  East:  {enu.e:10.3f} m")
    print(f"  North: {enu.n:10.3f} m")
    print(f"  Up:    {enu.u:10.3f} m")
    print(f"  Altitude difference: {mcgill.alt - poly.alt:10.3f} m")

    # Example 3: Distances and curvature
    print("\n3. Distances")
    print("-" * 70)
    print(f"  |ENU|:           {enu.norm():10.3f} m")
    print(f"  Chord (ECEF):    {chord_distance(poly, mcgill, wgs84):10.3f} m")
    print(f"  Surface:         {distance(poly, mcgill, wgs84):10.3f} m")
    print(f"  Curvature drop:  {curvature_drop(poly, mcgill, wgs84):10.3f} m")
    print(f"  |u| - |Δalt|:    {abs(enu.u) - abs(mcgill.alt - poly.alt):10.3f} m")

    # A transform built once is reused for every point
    to_local = enu_from_lla(poly, wgs84)
    print(f"\n  Québec City in the same frame: {to_local(quebec)}")
    print(f"  Surface distance to Québec City: {distance(poly, quebec, wgs84) / 1000:.3f} km")

    # Example 4: UTM
    print("\n4. UTM")
    print("-" * 70)
    for name, point in (("Polytechnique", poly), ("Québec City", quebec)):
        utm = to_utmz(point, wgs84)
        print(f"  {name:<14} {utm}")

    # Example 5: Sensor -> vehicle -> geographic -> ECEF
    print("\n5. Sensor measurement pipeline")
    print("-" * 70)
    pipeline = sensor_to_ecef_pipeline(
        sensor_rotation=rot_zyx(np.pi / 3, np.pi / 5, -np.pi / 4),
        sensor_position=[1.0, 2.0, 0.5],
        vehicle_lla=poly,
        vehicle_rotation=rot_zyx(np.pi / 2, 0.0, 0.0),
        datum=wgs84,
    )
    print(pipeline.describe())

    for measurement in (Spherical(0.0, 0.0, 0.0), Spherical(100.0, 0.2, 0.1)):
        ecef = pipeline(measurement)
        lla = to_lla(ecef, wgs84)
        print(f"\n  Measurement {measurement}")
        print(f"    ECEF: X={ecef.x:,.2f} m  Y={ecef.y:,.2f} m  Z={ecef.z:,.2f} m")
        print(f"    LLA:  {lla}")

    print("\n" + "=" * 70)


if __name__ == "__main__":
    main()
