from django.core.management.base import BaseCommand, CommandError

from src.campgrounds.models import Campground
from src.campgrounds.services import RatingAggregator


class Command(BaseCommand):
    help = "Rebuild average_rating / reviews_count for all (or the given) campgrounds"

    def add_arguments(self, parser):
        parser.add_argument("campground_ids", nargs="*", type=int, help="Campground ids (default: all)")

    def handle(self, *args, **opts):
        ids = opts["campground_ids"]
        qs = Campground.objects.all()
        if ids:
            qs = qs.filter(pk__in=ids)
            missing = set(ids) - set(qs.values_list("pk", flat=True))
            if missing:
                raise CommandError(f"Unknown campground ids: {', '.join(map(str, sorted(missing)))}")

        aggregator = RatingAggregator()
        updated = 0
        for campground_id in qs.values_list("pk", flat=True):
            result = aggregator.recompute(campground_id)
            if result is None:
                self.stderr.write(self.style.WARNING(f"Campground {campground_id}: aggregate update failed"))
                continue
            average, count = result
            updated += 1
            self.stdout.write(f"Campground {campground_id}: {average} ({count} reviews)")

        self.stdout.write(self.style.SUCCESS(f"Done. Updated {updated} campground(s)."))
