"""Basic usage: reconstruct balloon tracks and predict one drift path."""

from balloontrack import (
    ForecastClient,
    LinkingConfig,
    SnapshotClient,
    TrackingService,
)


def main() -> None:
    with SnapshotClient() as snapshots, ForecastClient() as forecasts:
        service = TrackingService(
            snapshots,
            forecasts,
            linking=LinkingConfig(dist_threshold_km=400),
        )

        tracks = service.load_tracks()
        long_tracks = [t for t in tracks if len(t) >= 3]
        print(f"=== {len(tracks)} tracks, {len(long_tracks)} spanning 3+ hours ===")
        for track in sorted(long_tracks, key=len, reverse=True)[:5]:
            last = track.last
            print(
                f"  #{track.track_id}: {len(track)} points, now at "
                f"{last.latitude:.2f}, {last.longitude:.2f} ({last.altitude_km:.1f} km)"
            )

        segments = service.track_segments(long_tracks)
        print(f"\n=== {len(segments)} drawable segments ===")
        for segment in segments[:3]:
            print(f"  {segment.to_latlngs()} {service.segment_color(segment)}")

        if not long_tracks:
            return

        # WINDY_API_KEY must be set for the forecast request
        start = long_tracks[0].last
        polyline = service.predicted_polyline(start.latitude, start.longitude)
        print(f"\n=== Predicted drift from track #{long_tracks[0].track_id} ===")
        for lat, lon in polyline:
            print(f"  {lat:.3f}, {lon:.3f}")


if __name__ == "__main__":
    main()
