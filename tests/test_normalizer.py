from datetime import datetime, timezone

from motodesign.services.normalizer import extract_images, normalize_record

from conftest import make_raw


class TestDefaults:

    def test_empty_record_gets_every_default(self):
        record = normalize_record({"id": "recX", "fields": {}}, current_year=2025)

        assert record.id == "recX"
        assert record.title_en == ""
        assert record.title_gr == ""
        assert record.brand == "Yamaha"
        assert record.model == ""
        assert record.category == ""
        assert record.condition == "New"
        assert record.year == 2025
        assert record.price == 0
        assert record.mileage_km == 0
        assert record.engine_cc == 0
        assert record.color == ""
        assert record.description_en == ""
        assert record.description_gr == ""
        assert record.images == ()
        assert record.featured is False
        assert record.available is True
        assert record.created_at is None
        assert record.related_listings == ()

    def test_missing_fields_key_and_garbage_input(self):
        assert normalize_record({"id": "a"}, current_year=2025).brand == "Yamaha"
        assert normalize_record(None, current_year=2025).id == ""
        assert normalize_record({"id": "b", "fields": "oops"}, current_year=2025).condition == "New"

    def test_year_defaults_to_current_calendar_year(self):
        record = normalize_record({"id": "recY", "fields": {}})
        assert record.year == datetime.now().year


class TestFieldHandling:

    def test_greek_falls_back_to_english(self):
        record = normalize_record(make_raw("r", title_en="MT-09", description_en="Naked bike"))
        assert record.title_gr == "MT-09"
        assert record.description_gr == "Naked bike"

    def test_greek_kept_when_present(self):
        record = normalize_record(make_raw("r", title_en="Scooter", title_gr="Σκούτερ"))
        assert record.title_gr == "Σκούτερ"

    def test_available_only_false_when_explicitly_false(self):
        assert normalize_record(make_raw("r", available=False)).available is False
        assert normalize_record(make_raw("r", available=None)).available is True
        assert normalize_record(make_raw("r", available=True)).available is True

    def test_numeric_values_are_non_negative_ints(self):
        record = normalize_record(
            make_raw("r", price="4500", mileage_km=-10, engine_cc=689.0, year="abc"),
            current_year=2025,
        )
        assert record.price == 4500
        assert record.mileage_km == 0
        assert record.engine_cc == 689
        assert record.year == 2025

    def test_created_time_parsed(self):
        record = normalize_record(make_raw("r", created="2024-03-01T10:00:00.000Z"))
        assert record.created_at == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_bad_created_time_is_none(self):
        assert normalize_record(make_raw("r", created="yesterday")).created_at is None

    def test_related_listings_keep_only_ids(self):
        record = normalize_record(make_raw("r", relatedListings=["recA", None, 3, "recB"]))
        assert record.related_listings == ("recA", "recB")


class TestImages:

    def test_thumbnails_fall_back_to_url(self):
        images = extract_images([
            {"id": "att1", "url": "https://cdn/x.jpg", "filename": "x.jpg", "width": 800, "height": 600,
             "thumbnails": {"large": {"url": "https://cdn/x-large.jpg"}}},
            {"id": "att2", "url": "https://cdn/y.jpg"},
        ])

        assert images[0].thumbnail == "https://cdn/x-large.jpg"
        assert images[0].thumbnail_small == "https://cdn/x.jpg"
        assert (images[0].width, images[0].height) == (800, 600)
        assert images[1].thumbnail == "https://cdn/y.jpg"
        assert images[1].width == 0

    def test_empty_sequence_is_preserved(self):
        assert extract_images(None) == ()
        assert extract_images("not-a-list") == ()
        assert normalize_record(make_raw("r", Images=[])).images == ()


class TestIdempotence:

    def test_renormalizing_is_a_noop(self):
        raw = make_raw(
            "recFull", "2024-05-01T10:00:00.000Z",
            title_en="NMAX 125", brand="Yamaha", model="NMAX", category="Scooter",
            condition="Used", year=2023, price=3500, mileage_km=1200, engine_cc=125,
            color="Blue", description_en="Clean",
            Images=[{"id": "att", "url": "https://cdn/n.jpg",
                     "thumbnails": {"large": {"url": "https://cdn/n-l.jpg"},
                                    "small": {"url": "https://cdn/n-s.jpg"}}}],
            featured=True, relatedListings=["recOther"],
        )
        once = normalize_record(raw, current_year=2025)
        twice = normalize_record(once.to_raw(), current_year=2025)
        assert twice == once

    def test_renormalizing_defaults_is_a_noop(self):
        once = normalize_record({"id": "recEmpty"}, current_year=2025)
        assert normalize_record(once.to_raw(), current_year=2025) == once

    def test_same_input_same_output(self):
        raw = make_raw("r", brand="Honda", price=1000)
        assert normalize_record(raw, current_year=2025) == normalize_record(raw, current_year=2025)
