# file: tests/test_module6_transport.py

"""
Unit and integration tests for Module 6: Transport tooling.

Test coverage:
    - Configuration loading and merging
    - Option building (arguments over configuration)
    - File read / write helpers
    - Calibration patterns
    - Command line exit codes
    - Inject -> video file -> extract end to end
"""

import argparse

import numpy as np
import pytest
import yaml

from module1_video_io import VideoIO
from module2_bit_codec import HeaderValueError
from module3_video_frame import AlgoFrame
from module6_transport import (
    AppMode,
    DEFAULT_CONFIG,
    ExtractOptions,
    InjectOptions,
    PatternOptions,
    OptionsError,
    TransportIOError,
    color_bars_frame,
    data_to_file,
    diagonal_frame,
    execute_with_video_options,
    extract_file,
    extract_options,
    file_to_data,
    load_config,
)
from module6_transport import pipeline
from module6_transport.cli import build_parser, main
from module6_transport.patterns import PATTERN_COLORS


VIDEO_IO = VideoIO()


def make_args(**kwargs):
    """Namespace shaped like the parsed command line."""
    fields = dict(
        mode=None,
        input_file_path=None,
        output_video_path=None,
        fps=None,
        size=None,
        height=None,
        width=None,
        algo=None,
        codec=None,
        show_progress=False,
    )
    fields.update(kwargs)
    return argparse.Namespace(**fields)


@pytest.fixture
def png_codec_available(tmp_path):
    """Skip when the local OpenCV build cannot round trip the png codec."""
    frame = np.zeros((16, 16, 3), dtype=np.uint8)
    frame[::2, ::2] = (255, 0, 0)
    path = str(tmp_path / "codec_check.avi")
    try:
        VIDEO_IO.write_video([frame], path, fps=30, codec="png")
        frames, _ = VIDEO_IO.load_video(path)
    except (IOError, ValueError):
        pytest.skip("OpenCV build cannot write png video")
    if len(frames) != 1 or not np.array_equal(frames[0], frame):
        pytest.skip("OpenCV png video is not lossless on this build")


class TestConfig:
    """Test configuration loading."""

    def test_packaged_defaults(self):
        config = load_config()
        assert config == DEFAULT_CONFIG

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "missing.yaml"))
        assert config["transport"]["width"] == 3840

    def test_partial_file_is_merged(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"transport": {"algo": "bw", "size": 4}}))
        config = load_config(str(path))
        assert config["transport"]["algo"] == "bw"
        assert config["transport"]["size"] == 4
        assert config["transport"]["fps"] == 30
        assert config["extraction"]["marker_tolerance"] == 64

    def test_defaults_are_not_mutated(self, tmp_path):
        config = load_config(str(tmp_path / "missing.yaml"))
        config["transport"]["fps"] = 1
        assert DEFAULT_CONFIG["transport"]["fps"] == 30

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("transport: [unclosed")
        with pytest.raises(OptionsError):
            load_config(str(path))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(OptionsError, match="mapping"):
            load_config(str(path))


class TestOptions:
    """Test option building."""

    def test_inject_defaults(self):
        options = extract_options(make_args(mode="inject", input_file_path="a.zip"), DEFAULT_CONFIG)
        assert isinstance(options, InjectOptions)
        assert options.file_path == "a.zip"
        assert options.output_video_file == "video.avi"
        assert (options.fps, options.width, options.height, options.size) == (30, 3840, 2160, 1)
        assert options.algo == AlgoFrame.RGB
        assert options.codec == "png"

    def test_inject_missing_input(self):
        with pytest.raises(OptionsError, match="Missing input file"):
            extract_options(make_args(mode="inject"), DEFAULT_CONFIG)

    def test_arguments_override_config(self):
        args = make_args(
            mode="inject", input_file_path="a.zip", output_video_path="out.avi",
            fps=60, width=1920, height=1080, size=2, algo="bw"
        )
        options = extract_options(args, DEFAULT_CONFIG)
        assert options.output_video_file == "out.avi"
        assert (options.fps, options.width, options.height, options.size) == (60, 1920, 1080, 2)
        assert options.algo == AlgoFrame.BW
        assert options.geometry.columns == 960

    def test_extract_defaults(self):
        options = extract_options(make_args(mode="extract"), DEFAULT_CONFIG)
        assert isinstance(options, ExtractOptions)
        assert options.video_file_path == "video.avi"
        assert options.extracted_file_path == "mydata.txt"
        assert options.marker_threshold == 0.9
        assert options.marker_tolerance == 64

    def test_pattern_defaults(self):
        options = extract_options(make_args(mode="diagonal"), DEFAULT_CONFIG)
        assert isinstance(options, PatternOptions)
        assert options.pattern == AppMode.DIAGONAL
        assert options.output_video_file == "diagonal_video.avi"
        assert options.num_frames == 30

    def test_missing_mode(self):
        with pytest.raises(OptionsError, match="Mode is required"):
            extract_options(make_args(), DEFAULT_CONFIG)

    def test_unknown_mode(self):
        with pytest.raises(OptionsError, match="Unknown mode"):
            extract_options(make_args(mode="upload"), DEFAULT_CONFIG)

    @pytest.mark.parametrize("name,value", [
        ("fps", 0),
        ("width", -5),
        ("size", "big"),
        ("algo", "cmyk"),
    ])
    def test_invalid_values(self, name, value):
        args = make_args(mode="extract", **{name: value})
        with pytest.raises(OptionsError):
            extract_options(args, DEFAULT_CONFIG)

    def test_options_are_frozen(self):
        options = extract_options(make_args(mode="extract"), DEFAULT_CONFIG)
        with pytest.raises(AttributeError):
            options.fps = 10


class TestFileIO:
    """Test payload file helpers."""

    def test_roundtrip(self, tmp_path):
        path = str(tmp_path / "nested" / "data.bin")
        data_to_file(path, b'\x00\x01payload')
        assert file_to_data(path) == b'\x00\x01payload'

    def test_overwrite(self, tmp_path):
        path = str(tmp_path / "data.bin")
        data_to_file(path, b'long content')
        data_to_file(path, b'short')
        assert file_to_data(path) == b'short'

    def test_read_missing(self, tmp_path):
        with pytest.raises(TransportIOError, match="Unable to read file"):
            file_to_data(str(tmp_path / "missing.bin"))

    def test_write_to_directory(self, tmp_path):
        with pytest.raises(TransportIOError, match="Unable to write file"):
            data_to_file(str(tmp_path), b'x')


class TestPatterns:
    """Test calibration frames."""

    def test_color_bars_border(self):
        frame = color_bars_frame(40, 30, 2)
        assert tuple(frame.image[0, 0]) == tuple(PATTERN_COLORS[0])
        assert tuple(frame.image[29, 39]) == tuple(PATTERN_COLORS[0])
        assert tuple(frame.image[2, 2]) == tuple(PATTERN_COLORS[1])

    def test_color_bars_center_is_white(self):
        frame = color_bars_frame(100, 100, 1)
        assert tuple(frame.image[50, 50]) == (255, 255, 255)

    def test_diagonal_corners(self):
        frame = diagonal_frame(40, 40, 1, diagonal_cells=5)
        for x, y in [(0, 0), (4, 4), (39, 0), (0, 39), (35, 35)]:
            assert tuple(frame.image[y, x]) == (0, 0, 0)
        assert tuple(frame.image[5, 5]) == (255, 255, 255)
        assert tuple(frame.image[20, 20]) == (255, 255, 255)
        assert tuple(frame.image[0, 1]) == (255, 255, 255)

    def test_generate_pattern_video(self, tmp_path):
        output = str(tmp_path / "bars.avi")
        options = PatternOptions(
            pattern=AppMode.COLORFRAME,
            output_video_file=output,
            fps=10,
            width=32,
            height=24,
            size=1,
            num_frames=3,
            codec="mjpg",
        )
        assert execute_with_video_options(options) == 3
        _, metadata = VIDEO_IO.load_video(output)
        assert metadata.num_frames == 3


class TestCommandLine:
    """Test the command line entry point."""

    def test_parser_flags(self):
        args = build_parser().parse_args(
            ["-m", "inject", "-i", "a.zip", "-o", "v.avi", "-f", "24",
             "-s", "2", "-g", "480", "-w", "640", "-a", "bw"]
        )
        assert args.mode == "inject"
        assert (args.fps, args.size, args.height, args.width) == (24, 2, 480, 640)
        assert args.algo == "bw"

    def test_missing_mode_exit_code(self):
        assert main([]) == 1

    def test_missing_input_exit_code(self, tmp_path):
        assert main(["-m", "inject", "-i", str(tmp_path / "missing.bin")]) == 1

    def test_extract_without_starting_frame(self, tmp_path):
        video = str(tmp_path / "blank.avi")
        VIDEO_IO.write_video([np.zeros((16, 16, 3), dtype=np.uint8)] * 2, video, fps=10, codec="mjpg")
        code = main([
            "-m", "extract", "-i", video, "-o", str(tmp_path / "out.bin"),
            "-w", "16", "-g", "16", "-a", "bw",
        ])
        assert code == 1
        assert not (tmp_path / "out.bin").exists()

    def test_missing_video_exit_code(self, tmp_path):
        code = main(["-m", "extract", "-i", str(tmp_path / "none.avi"), "-w", "16", "-g", "16"])
        assert code == 1


class TestExtractFile:
    """Only opening the video is reported as an I/O failure."""

    def _options(self, tmp_path, video):
        return ExtractOptions(
            video_file_path=str(video),
            extracted_file_path=str(tmp_path / "out.bin"),
            fps=10,
            width=16,
            height=16,
            size=1,
            algo=AlgoFrame.BW,
        )

    def test_missing_video(self, tmp_path):
        with pytest.raises(TransportIOError):
            extract_file(self._options(tmp_path, tmp_path / "none.avi"))

    def test_decode_errors_are_not_io_errors(self, tmp_path, monkeypatch):
        video = tmp_path / "blank.avi"
        VIDEO_IO.write_video([np.zeros((16, 16, 3), dtype=np.uint8)] * 2, str(video), fps=10, codec="mjpg")

        def failing_decode(*args, **kwargs):
            raise HeaderValueError("Expected 64 header bits, got 3")

        monkeypatch.setattr(pipeline, "frames_to_data_with_metadata", failing_decode)

        with pytest.raises(HeaderValueError):
            extract_file(self._options(tmp_path, video))


class TestEndToEnd:
    """Inject a file into a video file and extract it back."""

    @pytest.mark.parametrize("algo", ["rgb", "bw"])
    def test_lossless_video(self, tmp_path, png_codec_available, algo):
        source = tmp_path / "source.bin"
        source.write_bytes(np.random.default_rng(5).integers(0, 256, 3000, dtype=np.uint8).tobytes())
        video = tmp_path / "transfer.avi"
        target = tmp_path / "target.bin"

        assert main([
            "-m", "inject", "-i", str(source), "-o", str(video),
            "-w", "64", "-g", "48", "-a", algo,
        ]) == 0
        assert main([
            "-m", "extract", "-i", str(video), "-o", str(target),
            "-w", "64", "-g", "48", "-a", algo,
        ]) == 0

        assert target.read_bytes() == source.read_bytes()

    def test_bw_survives_lossy_codec(self, tmp_path):
        """Black and white 4x4 cells decode through MJPG compression."""
        source = tmp_path / "source.txt"
        source.write_bytes(b"hello through a lossy capture chain" * 4)
        video = tmp_path / "transfer.avi"
        target = tmp_path / "target.txt"

        assert main([
            "-m", "inject", "-i", str(source), "-o", str(video), "--codec", "mjpg",
            "-w", "128", "-g", "128", "-s", "4", "-a", "bw",
        ]) == 0
        assert main([
            "-m", "extract", "-i", str(video), "-o", str(target),
            "-w", "128", "-g", "128", "-s", "4", "-a", "bw",
        ]) == 0

        assert target.read_bytes() == source.read_bytes()
