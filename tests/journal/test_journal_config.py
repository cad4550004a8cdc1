"""Tests for daybook.journal.config."""

from daybook.core.config import Config
from daybook.journal.config import FOOTER_DATE_FORMAT, HEADER_DATE_FORMAT, AudioFormat, JournalConfig


class TestAudioFormat:
    def test_defaults(self):
        fmt = AudioFormat()
        assert fmt.codec == "aac"
        assert fmt.sample_rate == 12000
        assert fmt.channels == 1
        assert fmt.extension == ".m4a"


class TestJournalConfig:
    def test_defaults(self):
        config = JournalConfig()
        assert config.waveform_buckets == 60
        assert config.seed_sample_entries is True
        assert config.audio_format == AudioFormat()
        assert config.header_date_format == HEADER_DATE_FORMAT
        assert config.footer_date_format == FOOTER_DATE_FORMAT

    def test_from_config(self, tmp_config_file, tmp_dir):
        config = JournalConfig.from_config(Config(config_file=tmp_config_file, data_dir=tmp_dir))
        assert config.waveform_buckets == 30
        assert config.seed_sample_entries is True

    def test_from_config_env_bool(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("DAYBOOK_JOURNAL__SEED_SAMPLE_ENTRIES", "false")
        config = JournalConfig.from_config(Config(data_dir=tmp_dir))
        assert config.seed_sample_entries is False

    def test_from_config_date_formats(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("DAYBOOK_JOURNAL__FOOTER_DATE_FORMAT", "{day} {month} {year}")
        config = JournalConfig.from_config(Config(data_dir=tmp_dir))
        assert config.footer_date_format == "{day} {month} {year}"
        assert config.header_date_format == HEADER_DATE_FORMAT
