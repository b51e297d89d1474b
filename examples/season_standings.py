"""Print the current championship tables and a driver profile."""

import asyncio
import sys

from f1standings import SeasonAggregator, get_settings


async def main(driver_query: str) -> None:
    settings = get_settings()
    async with SeasonAggregator.from_settings(settings) as season:
        await season.initialize()
        if not season.is_ready():
            print(f"No completed races found for {settings.season}.")
            return

        if season.snapshot.has_preliminary:
            print("(includes preliminary results)\n")

        print(f"=== {settings.season} Drivers' Championship ===")
        for s in season.driver_standings()[:10]:
            print(
                f"  {s.position:>2}. {s.driver:<24} {s.team:<20} {s.points:>6g} pts"
                f"  W{s.wins} P{s.podiums} Poles {s.pole_positions}"
            )

        print(f"\n=== {settings.season} Constructors' Championship ===")
        for t in season.team_standings():
            print(f"  {t.position:>2}. {t.team:<24} {t.points:>6g} pts  W{t.wins}")

        profile = season.driver_profile(driver_query)
        if profile is None:
            print(f"\nNo driver matching '{driver_query}'")
            return

        print(f"\n=== {profile.driver} (#{profile.driver_number}, {profile.team}) ===")
        print(f"  P{profile.championship_position} with {profile.points:g} pts")
        print(f"  Finish rate: {profile.finish_rate}%  Avg position: {profile.avg_position}")
        for weekend in profile.recent_weekends:
            line = ", ".join(
                f"{r.kind.value} {r.classification.label}" for r in weekend.results
            )
            print(f"  {weekend.track}: {line}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "verstappen"))
