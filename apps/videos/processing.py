"""
ffmpeg/ffprobe backed media stages: fast-start remux and aspect classification
"""

import enum
import json
import logging

from core.exceptions import ProcessingError

logger = logging.getLogger(__name__)

FASTSTART_SUFFIX = '.faststart.mp4'
ASPECT_TOLERANCE = 0.05
LANDSCAPE_RATIO = 16 / 9
PORTRAIT_RATIO = 9 / 16


class AspectLabel(str, enum.Enum):
    LANDSCAPE = 'landscape'
    PORTRAIT = 'portrait'
    OTHER = 'other'

    def __str__(self):
        return self.value


def label_for_dimensions(width, height):
    """Bucket a frame size into an aspect label"""
    if not width or not height:
        return AspectLabel.OTHER

    ratio = float(width) / float(height)
    if abs(ratio - LANDSCAPE_RATIO) < ASPECT_TOLERANCE:
        return AspectLabel.LANDSCAPE
    if abs(ratio - PORTRAIT_RATIO) < ASPECT_TOLERANCE:
        return AspectLabel.PORTRAIT
    return AspectLabel.OTHER


class FastStartRemuxer:
    """Move the moov atom to the front of an mp4 without re-encoding"""

    def __init__(self, runner, ffmpeg_binary='ffmpeg'):
        self.runner = runner
        self.ffmpeg_binary = ffmpeg_binary

    @staticmethod
    def output_path_for(input_path):
        return input_path + FASTSTART_SUFFIX

    def remux(self, input_path, deadline=None):
        output_path = self.output_path_for(input_path)
        result = self.runner.run(
            self.ffmpeg_binary,
            [
                '-y',
                '-i', input_path,
                '-c', 'copy',
                '-movflags', '+faststart',
                '-f', 'mp4',
                output_path,
            ],
            deadline=deadline,
        )

        if result.returncode != 0:
            logger.warning(
                "ffmpeg exited with status %s for %s: %s",
                result.returncode, input_path, result.stderr.strip(),
            )
            raise ProcessingError(
                f"ffmpeg exited with status {result.returncode}",
                diagnostics=result.stderr,
            )

        return output_path


class AspectClassifier:
    """Probe a file's first video stream and classify its geometry"""

    def __init__(self, runner, ffprobe_binary='ffprobe'):
        self.runner = runner
        self.ffprobe_binary = ffprobe_binary

    def probe_streams(self, path, deadline=None):
        result = self.runner.run(
            self.ffprobe_binary,
            ['-v', 'error', '-print_format', 'json', '-show_streams', path],
            deadline=deadline,
        )

        if result.returncode != 0:
            raise ProcessingError(
                f"ffprobe exited with status {result.returncode}",
                diagnostics=result.stderr,
            )

        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as exc:
            raise ProcessingError(
                f"ffprobe output is not valid JSON: {exc}",
                diagnostics=result.stderr,
            ) from exc

        if not isinstance(payload, dict):
            raise ProcessingError("ffprobe output is not a JSON object", diagnostics=result.stderr)

        streams = payload.get('streams') or []
        if not isinstance(streams, list):
            raise ProcessingError("ffprobe 'streams' is not a list", diagnostics=result.stderr)
        return streams

    def classify(self, path, deadline=None):
        streams = self.probe_streams(path, deadline=deadline)

        video_stream = next(
            (stream for stream in streams
             if isinstance(stream, dict) and stream.get('codec_type') == 'video'),
            None,
        )
        if video_stream is None:
            logger.info("No video stream found in %s", path)
            return AspectLabel.OTHER

        try:
            width = int(video_stream.get('width') or 0)
            height = int(video_stream.get('height') or 0)
        except (TypeError, ValueError):
            width = height = 0

        label = label_for_dimensions(width, height)
        logger.debug("Classified %s (%sx%s) as %s", path, width, height, label)
        return label
