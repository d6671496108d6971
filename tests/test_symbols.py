"""Tests for the default symbol provider and per-run settings."""

from pathlib import Path

import pytest

from assembly_bundler.config import BundleSettings
from assembly_bundler.core.symbols import DefaultSymbolProvider, SymbolProvider, to_identifier


class TestDefaultSymbolProvider:

    def test_name_is_file_name(self, symbols):
        assert symbols.derive_name(Path("bin/Foo.Bar.dll")) == "Foo.Bar.dll"

    def test_function_names(self, symbols):
        assert symbols.getter_symbol("Foo.Bar.dll") == "mono_bundled_assembly_get_Foo_Bar_dll"
        assert symbols.config_getter_symbol("Foo.Bar.dll") == "mono_bundled_assembly_get_config_Foo_Bar_dll"
        assert symbols.cleanup_symbol("Foo.Bar.dll") == "mono_bundled_assembly_cleanup_Foo_Bar_dll"

    def test_custom_prefix(self):
        assert DefaultSymbolProvider(prefix="app").getter_symbol("A.dll") == "app_get_A_dll"

    def test_to_identifier(self):
        assert to_identifier("My-Lib 2.dll") == "My_Lib_2_dll"

    def test_abstract_provider_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            SymbolProvider()


class TestBundleSettings:

    def test_paths(self, tmp_path):
        settings = BundleSettings(output_dir=tmp_path)
        assert settings.output_path_for(Path("bin/App.dll")) == tmp_path / "App.dll.bundle.c"
        assert settings.config_copy_path_for("App.dll") == tmp_path / "App.dll.config"

    def test_string_output_dir_becomes_path(self, tmp_path):
        settings = BundleSettings(output_dir=str(tmp_path))
        assert settings.output_dir == tmp_path

    def test_empty_output_dir_rejected(self):
        with pytest.raises(ValueError):
            BundleSettings(output_dir="")

    def test_from_env(self):
        settings = BundleSettings.from_env()
        assert isinstance(settings.output_dir, Path)
