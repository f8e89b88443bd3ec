"""Tests for Language loading, fallback and override precedence."""

import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from inilexengine.diagnostics import MetadataInvalidError, MetadataNotFoundError
from inilexengine.enums import ResolverState
from inilexengine.localization import (
    Language,
    LanguageConfig,
    LanguageFactory,
    StaticApplication,
    escape_js,
)
from tests.helpers.trees import CountingLoader, LanguageTree


class TestConstruction:
    """Test the construction sequence."""

    def test_ready_after_construction(self, factory: LanguageFactory) -> None:
        """A constructed Language is READY."""
        language = factory.create_language("en-GB")
        assert language.state == ResolverState.READY
        assert language.get_tag() == "en-GB"

    def test_tag_defaults_to_default_language(self, factory: LanguageFactory) -> None:
        """No tag selects the configured default language."""
        assert Language(factory).get_tag() == "en-GB"
        assert Language(factory, "").get_tag() == "en-GB"

    def test_missing_metadata_is_fatal(self, factory: LanguageFactory) -> None:
        """A language without metadata cannot be constructed."""
        with pytest.raises(MetadataNotFoundError):
            factory.create_language("xx-XX")

    def test_invalid_metadata_is_fatal(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """Unparsable metadata fails construction."""
        directory = tree.language_dir / "de-DE"
        directory.mkdir()
        (directory / "metadata.json").write_text('{"name": "Deutsch"}', encoding="utf-8")
        with pytest.raises(MetadataInvalidError):
            factory.create_language("de-DE")

    def test_system_strings_loaded(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """The system extension is loaded during construction."""
        tree.write("en-GB", "system.ini", 'HELLO="Hello"')
        language = factory.create_language("en-GB")
        assert language.has_key("HELLO")
        assert language.get_paths("system") == {
            str(tree.language_dir / "en-GB" / "system.ini"): True,
        }

    def test_legacy_system_file(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """<tag>.ini is used when system.ini is absent."""
        tree.write("fr-FR", "fr-FR.ini", 'BONJOUR="Bonjour"')
        assert factory.create_language("fr-FR").translate("bonjour") == "Bonjour"

    def test_missing_resource_files_are_not_errors(self, factory: LanguageFactory) -> None:
        """A language with only metadata constructs with an empty table."""
        language = factory.create_language("fr-FR")
        assert language.translate("ANYTHING") == "ANYTHING"


class TestBasicResolution:
    """End-to-end lookups against system and override files."""

    def test_system_string(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """system.ini strings resolve case-insensitively."""
        tree.write("en-GB", "system.ini", 'HELLO="Hello"')
        language = factory.create_language("en-GB")
        assert language.load("system", tree.base) is True
        assert language.translate("hello") == "Hello"

    def test_override_beats_system(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """The override patch wins over the system file."""
        tree.write("en-GB", "system.ini", 'HELLO="Hello"')
        tree.write_override("en-GB", 'HELLO="Hi"')
        assert factory.create_language("en-GB").translate("hello") == "Hi"

    def test_miss_returns_input(self, factory: LanguageFactory) -> None:
        """A miss returns the original string, not the upper-cased key."""
        assert factory.create_language("en-GB").translate("Not translated") == "Not translated"

    def test_empty_string(self, factory: LanguageFactory) -> None:
        """The empty string translates to itself."""
        assert factory.create_language("en-GB").translate("") == ""

    @pytest.mark.parametrize("spelling", ["foo", "FOO", "Foo", "fOo"])
    def test_case_insensitive(self, tree: LanguageTree, factory: LanguageFactory, spelling: str) -> None:
        """All spellings of a key resolve to the same value."""
        tree.write("en-GB", "system.ini", 'FOO="Bar"')
        language = factory.create_language("en-GB")
        assert language.translate(spelling) == "Bar"
        assert language.has_key(spelling)


class TestIdempotentLoad:
    """Test that repeated loads do not re-read files."""

    def test_second_load_parses_nothing(
        self, tree: LanguageTree, factory: LanguageFactory, counting_loader: CountingLoader
    ) -> None:
        """A repeated load reuses recorded outcomes and returns the same result."""
        tree.write("fr-FR", "com_demo.ini", 'COM_DEMO="Démo"')
        language = Language(factory, "fr-FR", loader=counting_loader)

        first = language.load("com_demo", tree.base)
        calls = len(counting_loader.calls)
        count = language.load_count
        second = language.load("com_demo", tree.base)

        assert first is second is True
        assert len(counting_loader.calls) == calls
        assert language.load_count == count

    def test_concurrent_loads_parse_once(
        self, tree: LanguageTree, factory: LanguageFactory, counting_loader: CountingLoader
    ) -> None:
        """Loads racing on one resolver parse each candidate once and agree."""
        own = tree.write("fr-FR", "com_x.ini", 'COM_X_TITLE="Titre"')
        default = tree.write("en-GB", "com_x.ini", 'COM_X_TITLE="Title"\nCOM_X_ONLY="Only"')
        language = Language(factory, "fr-FR", loader=counting_loader)
        workers = 8
        barrier = threading.Barrier(workers)

        def worker(_: int) -> bool:
            barrier.wait(timeout=5)
            return language.load("com_x", tree.base)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(worker, range(workers)))

        assert results == [True] * workers
        assert counting_loader.count(own) == 1
        assert counting_loader.count(default) == 1
        assert language.translate("COM_X_TITLE") == "Titre"
        assert language.translate("COM_X_ONLY") == "Only"

    def test_known_empty_not_reparsed(
        self, tree: LanguageTree, factory: LanguageFactory, counting_loader: CountingLoader
    ) -> None:
        """Absent files are remembered as failures."""
        language = Language(factory, "fr-FR", loader=counting_loader)
        assert language.load("com_none", tree.base) is False
        calls = len(counting_loader.calls)
        assert language.load("com_none", tree.base) is False
        assert len(counting_loader.calls) == calls

    def test_reload_reparses(
        self, tree: LanguageTree, factory: LanguageFactory, counting_loader: CountingLoader
    ) -> None:
        """reload=True reads the files again and picks up changes."""
        path = tree.write("en-GB", "com_demo.ini", 'COM_DEMO="Old"')
        language = Language(factory, "en-GB", loader=counting_loader)
        language.load("com_demo", tree.base)

        path.write_text('COM_DEMO="New"', encoding="utf-8")
        language.load("com_demo", tree.base)
        assert language.translate("COM_DEMO") == "Old"

        assert language.load("com_demo", tree.base, reload=True) is True
        assert counting_loader.count(path) == 2
        assert language.translate("COM_DEMO") == "New"

    def test_load_count_tracks_parses(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """load_count grows by one per file parsed."""
        language = factory.create_language("en-GB")
        before = language.load_count
        language.load("com_absent", tree.base)
        assert language.load_count == before + 2


class TestCandidateFiles:
    """Test candidate file order and short-circuit."""

    def test_first_successful_candidate_wins(
        self, tree: LanguageTree, factory: LanguageFactory, counting_loader: CountingLoader
    ) -> None:
        """Only the first contributing file is loaded per call."""
        tree.write("en-GB", "com_both.ini", 'A="plain"')
        legacy = tree.write("en-GB", "en-GB.com_both.ini", 'A="legacy"\nB="legacy only"')
        language = Language(factory, "en-GB", loader=counting_loader)

        assert language.load("com_both", tree.base) is True
        assert language.translate("A") == "plain"
        assert not language.has_key("B")
        assert counting_loader.count(legacy) == 0

    def test_legacy_name_fallback(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """<tag>.<ext>.ini is used when <ext>.ini is absent."""
        tree.write("en-GB", "en-GB.com_old.ini", 'OLD="Legacy"')
        language = factory.create_language("en-GB")
        assert language.load("com_old", tree.base) is True
        assert language.translate("OLD") == "Legacy"
        paths = language.get_paths("com_old")
        assert list(paths.values()) == [False, True]

    def test_empty_file_is_failure(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """A file with no strings contributes nothing."""
        tree.write("en-GB", "com_empty.ini", "; nothing here\n")
        assert factory.create_language("en-GB").load("com_empty", tree.base) is False

    def test_malformed_file_is_failure(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """A file the parser rejects contributes nothing."""
        tree.write("en-GB", "com_broken.ini", 'A="unterminated')
        assert factory.create_language("en-GB").load("com_broken", tree.base) is False

    def test_get_paths_all_extensions(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """get_paths() without an extension returns the whole record."""
        language = factory.create_language("en-GB")
        language.load("com_a", tree.base)
        assert set(language.get_paths()) == {"system", "com_a"}

    def test_default_base_path(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """load() without a base path uses the application directory."""
        tree.write("en-GB", "com_app.ini", 'APP="App"')
        language = factory.create_language("en-GB")
        assert language.load("com_app") is True
        assert language.base_path == tree.base


class TestDefaultFallback:
    """Test default-language fallback in production and debug mode."""

    def test_default_strings_fill_gaps(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """A missing extension file falls back to the default language."""
        tree.write("en-GB", "com_x.ini", 'X="English"')
        language = factory.create_language("fr-FR")
        assert language.load("com_x", tree.base) is True
        assert language.translate("X") == "English"

    def test_own_strings_beat_default(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """The language's own strings overwrite default-language strings."""
        tree.write("en-GB", "com_y.ini", 'Y="EN"\nONLY_EN="English only"')
        tree.write("fr-FR", "com_y.ini", 'Y="FR"')
        language = factory.create_language("fr-FR")
        assert language.load("com_y", tree.base) is True
        assert language.translate("Y") == "FR"
        assert language.translate("ONLY_EN") == "English only"

    def test_system_fallback(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """System strings fall back to the default language too."""
        tree.write("en-GB", "system.ini", 'JYES="Yes"')
        assert factory.create_language("fr-FR").translate("JYES") == "Yes"

    def test_debug_mode_has_no_fallback(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """In debug mode the default language is never loaded underneath."""
        tree.write("en-GB", "com_x.ini", 'X="English"')
        language = factory.create_language("fr-FR", debug=True)
        assert language.load("com_x", tree.base) is False
        assert language.translate("X") == "??X??"

    def test_fallback_can_be_disabled(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """load_default_first=False skips the default language."""
        tree.write("en-GB", "com_x.ini", 'X="English"')
        language = factory.create_language("fr-FR")
        assert language.load("com_x", tree.base, load_default_first=False) is False
        assert not language.has_key("X")

    def test_explicit_lang(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """lang= loads another language's files into this table."""
        tree.add_language("de-DE")
        tree.write("de-DE", "com_z.ini", 'Z="Deutsch"')
        language = factory.create_language("en-GB")
        assert language.load("com_z", tree.base, lang="de-DE") is True
        assert language.translate("Z") == "Deutsch"

    def test_set_default_changes_fallback(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """set_default() redirects later fallback loads."""
        tree.add_language("de-DE")
        tree.write("de-DE", "com_q.ini", 'Q="DE"')
        tree.write("en-GB", "com_q.ini", 'Q="EN"')
        language = factory.create_language("fr-FR")
        assert language.set_default("de-DE") == "en-GB"
        assert language.get_default() == "de-DE"
        language.load("com_q", tree.base)
        assert language.translate("Q") == "DE"

    def test_configured_default_language(self, tree: LanguageTree) -> None:
        """The default language comes from LanguageConfig."""
        tree.write("fr-FR", "com_w.ini", 'W="Français"')
        config = LanguageConfig(default_language="fr-FR")
        factory = LanguageFactory(StaticApplication(tree.base), config=config)
        language = factory.create_language("en-GB")
        assert language.load("com_w", tree.base) is True
        assert language.translate("W") == "Français"


class TestOverrides:
    """Test override patch precedence."""

    def test_override_survives_later_loads(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """Later extension loads never shadow an override."""
        tree.write_override("fr-FR", 'K="Override"')
        tree.write("fr-FR", "com_a.ini", 'K="A"')
        tree.write("fr-FR", "com_b.ini", 'K="B"')
        language = factory.create_language("fr-FR")
        language.load("com_a", tree.base)
        assert language.translate("K") == "Override"
        language.load("com_b", tree.base)
        assert language.translate("K") == "Override"

    def test_override_only_key_after_load(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """Override-only keys become visible once any file contributes."""
        tree.write("en-GB", "system.ini", 'HELLO="Hello"')
        tree.write_override("en-GB", 'EXTRA="Extra"')
        assert factory.create_language("en-GB").translate("EXTRA") == "Extra"

    def test_default_override_not_applied(
        self, tree: LanguageTree, factory: LanguageFactory, counting_loader: CountingLoader
    ) -> None:
        """The default language's override is read but never applied."""
        tree.write("en-GB", "system.ini", 'HELLO="Hello"')
        default_override = tree.write_override("en-GB", 'HELLO="English override"')
        language = Language(factory, "fr-FR", loader=counting_loader)
        assert counting_loader.count(default_override) == 1
        assert language.translate("HELLO") == "Hello"

    def test_default_override_not_read_in_debug(
        self, tree: LanguageTree, factory: LanguageFactory, counting_loader: CountingLoader
    ) -> None:
        """Debug resolvers skip the default language's override file."""
        default_override = tree.write_override("en-GB", 'HELLO="English override"')
        Language(factory, "fr-FR", debug=True, loader=counting_loader)
        assert counting_loader.count(default_override) == 0

    def test_override_keys_upper_cased(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """Override keys are case-insensitive like everything else."""
        tree.write("en-GB", "system.ini", 'HELLO="Hello"')
        tree.write_override("en-GB", 'hello="Hi"')
        assert factory.create_language("en-GB").translate("Hello") == "Hi"


class TestPostProcessing:
    """Test js_safe escaping and backslash interpretation."""

    @pytest.fixture
    def language(self, tree: LanguageTree, factory: LanguageFactory) -> Language:
        tree.write(
            "en-GB",
            "system.ini",
            "\n".join(
                [
                    r'QUOTE="It' + "'" + r's \"fine\""',
                    r'NL="a\nb"',
                    r'TAB="a\tb"',
                    r'PATH="C:\\new"',
                ]
            ),
        )
        return factory.create_language("en-GB")

    def test_backslashes_interpreted(self, language: Language) -> None:
        r"""\n and \t become control characters by default."""
        assert language.translate("NL") == "a\nb"
        assert language.translate("TAB") == "a\tb"

    def test_escaped_backslash_single_pass(self, language: Language) -> None:
        r"""\\n is an escaped backslash followed by n, not a newline."""
        assert language.translate("PATH") == "C:\\new"

    def test_backslashes_kept(self, language: Language) -> None:
        """interpret_backslashes=False returns the raw value."""
        assert language.translate("NL", interpret_backslashes=False) == r"a\nb"

    def test_js_safe(self, language: Language) -> None:
        """js_safe escapes quotes for a JavaScript literal."""
        assert language.translate("QUOTE", js_safe=True) == "It\\'s \\\"fine\\\""

    def test_js_safe_takes_precedence(self, language: Language) -> None:
        """With js_safe, backslash sequences are escaped, not interpreted."""
        assert language.translate("NL", js_safe=True) == r"a\\nb"

    def test_js_safe_control_characters(self, tree: LanguageTree, factory: LanguageFactory) -> None:
        """Raw control characters in values are escaped for JavaScript."""
        tree.write("en-GB", "com_ml.ini", 'ML="one\ntwo"')
        language = factory.create_language("en-GB")
        language.load("com_ml", Path(tree.base))
        assert language.translate("ML", js_safe=True) == r"one\ntwo"

    def test_js_safe_nul_before_digit(self) -> None:
        """NUL is written as \\x00 so a following digit never forms an octal escape."""
        assert escape_js("\x001") == r"\x001"
        assert escape_js("a\x00") == r"a\x00"
