from conftest import TEST_API_URL, RecordingDatamuse, json_response
from poets_pal.app.app import PoetsPalApp
from poets_pal.app.data.datamuse import DatamuseRepository
from poets_pal.config import Settings
from poets_pal.core import ProfanityTable


def _app(upstream: RecordingDatamuse, **kwargs) -> PoetsPalApp:
    repository = DatamuseRepository(TEST_API_URL, transport=upstream.transport())
    return PoetsPalApp(Settings(api_url=TEST_API_URL), repository=repository, **kwargs)


def test_app_wires_default_block_list():
    app = _app(RecordingDatamuse())

    assert len(app.profanity_table) > 0
    assert app.search_service.profanity_table is app.profanity_table


def test_app_loads_block_list_from_settings(tmp_path):
    source = tmp_path / "blocked.txt"
    source.write_text("aGVjaw==\n", encoding="utf-8")

    app = PoetsPalApp(Settings(blocklist_path=source))

    assert len(app.profanity_table) == 1
    assert app.repository.base_url == Settings().api_url


def test_search_words_returns_filtered_outcome():
    upstream = RecordingDatamuse(
        {
            "rel_rhy=": lambda: json_response(
                [
                    {"word": "day", "numSyllables": 1},
                    {"word": "heck", "numSyllables": 1},
                    {"word": "today", "numSyllables": 2},
                ]
            ),
            "rel_nry=": lambda: json_response([{"word": "date", "numSyllables": 1}]),
        }
    )
    app = _app(upstream, profanity_table=ProfanityTable.from_words(["heck"]))

    outcome = app.search_words(rhyme="may", syllables="1")

    assert [record.word for record in outcome.exact_matches] == ["day"]
    assert [record.word for record in outcome.near_matches] == ["date"]
    assert sorted(upstream.queries) == ["rel_nry=may&max=50", "rel_rhy=may&max=50"]
