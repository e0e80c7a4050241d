# cli.py
import contextlib
import os
import sys
import tempfile

from itinerary.errors import InputNotFoundError, ItineraryError, OutputWriteError
from itinerary.load import load_airport_lookup
from itinerary.transform import process_text

USAGE = "Itinerary usage:\n python -m itinerary.cli ./input.txt ./output.txt ./airport-lookup.csv"
HELP_FLAGS = ("-h", "--help")
OUTPUT_MODE = 0o644


def read_input(path: str) -> str:
    """Reads the itinerary; bytes that are not valid UTF-8 are carried through as-is."""
    try:
        with open(path, "rb") as stream:
            raw = stream.read()
    except OSError as e:
        raise InputNotFoundError() from e
    return raw.decode("utf-8", errors="surrogateescape")


def write_output(path: str, text: str) -> None:
    """
    Writes the text to a temporary file next to `path` and renames it into
    place, so a failed write never leaves a partial output file behind.
    """
    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".itinerary-", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="") as stream:
            stream.write(text)
        os.chmod(tmp_path, OUTPUT_MODE)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None:
            with contextlib.suppress(FileNotFoundError):
                os.remove(tmp_path)
        raise OutputWriteError() from e


def process_itinerary(input_path: str, output_path: str, lookup_path: str) -> None:
    airport_lookup = load_airport_lookup(lookup_path)
    print(f"Loaded {len(airport_lookup)} airport codes from {lookup_path}")
    text = read_input(input_path)
    write_output(output_path, process_text(text, airport_lookup))


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)

    if args and args[0] in HELP_FLAGS:
        print(USAGE)
        return 0

    if len(args) != 3:
        print("Incorrect number of arguments")
        print(USAGE)
        return 1

    input_path, output_path, lookup_path = args
    try:
        process_itinerary(input_path, output_path, lookup_path)
    except ItineraryError as e:
        print(e)
        return 1

    print(f"✅ Itinerary saved to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
