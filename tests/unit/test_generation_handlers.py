"""Tests for the topic submission and configuration-check handlers."""

from pathlib import Path
from unittest.mock import Mock, patch

from lawmemes.ui.handlers.generation import check_configuration, render_generation, submit_handler
from lawmemes.ui.models import GENERATION_FAILED_MESSAGE, GenerationPhase, UIState
from lawmemes.ui.state import cleanup_ui_state

# progress, error, grid container, 3 per cell (4 cells), 4 overlay, state
OUTPUT_COUNT = 2 + 1 + 3 * 4 + 4 + 1


class TestCheckConfiguration:
    """Tests for check_configuration."""

    def test_configured_session(self, ui_state):
        message, state = check_configuration(ui_state)

        assert message == ""
        assert state is ui_state

    def test_missing_key_message(self):
        failed = UIState(credential_error="API key is missing.")

        with patch(
            "lawmemes.ui.handlers.generation.initialize_ui_state", return_value=failed
        ) as mock_init:
            message, state = check_configuration(None)

        mock_init.assert_called_once_with(None)
        assert message == "❌ API key is missing."
        assert state is failed


class TestRenderGeneration:
    """Tests for render_generation."""

    def test_loading_shows_progress(self, ui_state):
        ui_state.generation.phase = GenerationPhase.LOADING
        ui_state.generation.progress = 30.0

        outputs = render_generation(ui_state, slot_count=4)

        assert len(outputs) == OUTPUT_COUNT
        assert outputs[0]["visible"] is True
        assert "width: 30.0%" in outputs[0]["value"]
        assert outputs[1]["visible"] is False
        assert outputs[-1] is ui_state

    def test_error_shown(self, ui_state):
        ui_state.generation.phase = GenerationPhase.ERROR
        ui_state.generation.error = GENERATION_FAILED_MESSAGE

        outputs = render_generation(ui_state, slot_count=4)

        assert outputs[0]["visible"] is False
        assert outputs[1]["visible"] is True
        assert outputs[1]["value"] == f"❌ {GENERATION_FAILED_MESSAGE}"


class TestSubmitHandler:
    """Tests for submit_handler."""

    def test_blank_topic_leaves_outputs_untouched(self, ui_state, fake_client, test_config):
        outputs = list(submit_handler("   ", ui_state, test_config))

        assert len(outputs) == 1
        result = outputs[0]
        assert len(result) == OUTPUT_COUNT
        for update in result[:-1]:
            assert update["__type__"] == "update"
            assert "value" not in update
            assert "visible" not in update
        assert result[-1] is ui_state
        fake_client.generate_meme_descriptions.assert_not_called()

    def test_streams_until_results(self, ui_state, test_config, sample_descriptions):
        outputs = list(submit_handler("court", ui_state, test_config))

        first, last = outputs[0], outputs[-1]
        assert first[0]["visible"] is True
        assert last[0]["visible"] is False
        assert last[1]["visible"] is False
        assert last[2]["visible"] is True

        state = last[-1]
        assert state.generation.phase is GenerationPhase.SHOWING_RESULTS
        assert [item.description for item in state.gallery.items] == sample_descriptions
        assert sorted(state.gallery.download_paths) == [0, 1, 2, 3]
        assert all(
            test_config.downloads_dir in Path(path).parents
            for path in state.gallery.download_paths.values()
        )

    def test_all_outputs_have_consistent_length(self, ui_state, test_config):
        for result in submit_handler("court", ui_state, test_config):
            assert len(result) == OUTPUT_COUNT

    def test_unexpected_error_shows_generic_message(self, ui_state, test_config):
        def exploding(*args, **kwargs):
            raise RuntimeError("unexpected")
            yield  # pragma: no cover

        with patch("lawmemes.ui.handlers.generation.submit_topic", side_effect=exploding):
            outputs = list(submit_handler("court", ui_state, test_config))

        last = outputs[-1]
        assert last[1]["value"] == f"❌ {GENERATION_FAILED_MESSAGE}"
        assert last[-1].generation.phase is GenerationPhase.ERROR

    def test_initializes_fresh_session(self, test_config):
        with patch("lawmemes.ui.state.GeminiClient") as mock_client_cls:
            client = Mock()
            client.generate_meme_descriptions.return_value = []
            mock_client_cls.from_config.return_value = client

            outputs = list(submit_handler("court", None, test_config))

        mock_client_cls.from_config.assert_called_once_with(test_config)
        assert outputs[-1][-1].client is client
        assert outputs[-1][-1].generation.error == GENERATION_FAILED_MESSAGE


class TestDownloadFileLifecycle:
    """Download files only exist for the gallery currently shown."""

    def test_new_cycle_and_cleanup_remove_old_files(self, ui_state, fake_client, test_config):
        fake_client.generate_meme_descriptions.return_value = [
            "Square image. A judge",
            "Square image. A lawyer",
        ]

        for topic in ("court", "parking", "tenancy"):
            for _ in submit_handler(topic, ui_state, test_config):
                pass
            assert len(list(test_config.downloads_dir.rglob("*.png"))) == 2

        cleanup_ui_state(ui_state)

        assert list(test_config.downloads_dir.rglob("*.png")) == []
        assert list(test_config.downloads_dir.iterdir()) == []

    def test_failed_cycle_removes_previous_files(self, ui_state, fake_client, test_config):
        for _ in submit_handler("court", ui_state, test_config):
            pass
        fake_client.generate_meme_descriptions.return_value = []

        for _ in submit_handler("parking", ui_state, test_config):
            pass

        assert ui_state.generation.error == GENERATION_FAILED_MESSAGE
        assert list(test_config.downloads_dir.rglob("*.png")) == []
