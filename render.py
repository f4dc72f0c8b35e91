import os
import sys
import time
import warnings
from argparse import ArgumentParser
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from escapetime import (
    DEFAULT_HEIGHT,
    DEFAULT_MAX_ITER,
    DEFAULT_WIDTH,
    PRESET_NAMES,
    allocate_buffer,
    preset_scenes,
    render_scene,
    write_ppm,
)


def detect_device():
    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        log("No GPU found, using CPU")
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError as e:
        # Memory growth can only be set before the GPU is initialized.
        log(e)
    log("GPU found, using %s" % gpus[0].name)
    return '/GPU:0'


def build_parser():
    parser = ArgumentParser(description='Render the preset escape-time fractal scenes as binary PPM images.')

    parser.add_argument('--width', type=int,
                        dest='width', help='image width in pixels',
                        metavar='WIDTH', default=DEFAULT_WIDTH)

    parser.add_argument('--height', type=int,
                        dest='height', help='image height in pixels',
                        metavar='HEIGHT', default=DEFAULT_HEIGHT)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='iteration cap; points reaching it are drawn black',
                        metavar='MAX_ITERATIONS', default=DEFAULT_MAX_ITER)

    parser.add_argument('--scene', dest='scenes', action='append', metavar='SCENE',
                        choices=PRESET_NAMES,
                        help='Preset scene to render. May be repeated. Choices: %s. Default: all.' % ', '.join(PRESET_NAMES))

    parser.add_argument('--output-dir', type=str,
                        dest='output_dir', help='directory that receives <scene>.ppm files',
                        metavar='OUTPUT_DIR', default='.')

    parser.add_argument('--band-height', type=int,
                        dest='band_height', help='rows per work item; by default the whole image is one work item',
                        metavar='BAND_HEIGHT', default=None)

    parser.add_argument('--workers', type=int,
                        dest='workers', help='threads used to render bands',
                        metavar='WORKERS', default=None)

    parser.add_argument('--device', type=str,
                        dest='device', help='TensorFlow device, e.g. "/CPU:0". Defaults to the first GPU when available.',
                        metavar='DEVICE', default=None)

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    if opt.band_height is not None and opt.band_height < 1:
        parser.error("--band-height must be positive.")
    if opt.workers is not None and opt.workers < 1:
        parser.error("--workers must be positive.")

    try:
        scenes = preset_scenes(opt.width, opt.height, opt.max_iterations, names=opt.scenes)
    except ValueError as e:
        parser.error(str(e))

    log("TensorFlow version: %s" % tf.__version__)
    device = opt.device if opt.device is not None else detect_device()
    output_dir = Path(opt.output_dir).expanduser()

    buffer = None
    failures = 0
    for index, (name, scene) in enumerate(scenes):
        print("scene {0} out of {1}: {2}".format(index + 1, len(scenes), name), end='\r')
        start = time.perf_counter()
        if buffer is None:
            buffer = allocate_buffer(scene)
        render_scene(scene, device=device, band_height=opt.band_height, max_workers=opt.workers, out=buffer)
        log("Rendered %s (%s) in %.3f seconds" % (name, scene.variant, time.perf_counter() - start))

        output_path = output_dir / f"{name}.ppm"
        try:
            write_ppm(buffer, output_path)
        except OSError as e:
            print(f"Could not write {output_path}: {e}. Skipping scene '{name}'.", file=sys.stderr)
            failures += 1
            continue
        log("Wrote %s" % output_path)

    print()
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
