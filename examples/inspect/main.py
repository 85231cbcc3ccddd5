import logging
import sys

from spotify_uri import Version
from spotify_uri.metadata import (LocalUri, MetaUri, SpotifyId, SpotifyIdError,
                                  SpotifyUri, StationUri, UnknownUri,
                                  UserItemUri)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("SpotifyUri:Inspect")


def describe_id(_id: SpotifyId):
    print("  base62: " + _id.base62_id())
    print("  hex:    " + _id.hex_id())
    print("  gid:    " + repr(_id.get_gid()))


def describe_uri(uri: SpotifyUri):
    print(type(uri).__name__ + ": " + str(uri))
    if isinstance(uri, UserItemUri):
        print("  user:   " + uri.username())
    if isinstance(uri, StationUri):
        print("  seed:   " + str(uri.seed()))
    elif isinstance(uri, MetaUri):
        print("  page:   " + str(uri.meta().index()))
    elif isinstance(uri, LocalUri):
        local = uri.local()
        print("  artist: " + local.artist())
        print("  album:  " + local.album_title())
        print("  track:  " + local.track_title())
        print("  length: {}s".format(local.duration_s()))
    elif isinstance(uri, UnknownUri):
        print("  type:   " + uri.typ())
        print("  rest:   " + repr(uri.rest()))
    if uri.item() is not None:
        print("  kind:   " + str(uri.item_type()))
        print("  play:   " + str(uri.is_playable()))
        describe_id(uri.id())


def inspect(arg: str):
    try:
        if ":" in arg:
            describe_uri(SpotifyUri.from_uri(arg))
        elif len(arg) == SpotifyId.SIZE_BASE16:
            print("SpotifyId (hex): " + arg)
            describe_id(SpotifyId.from_hex(arg))
        else:
            print("SpotifyId (base62): " + arg)
            describe_id(SpotifyId.from_base62(arg))
    except SpotifyIdError as e:
        logger.error("{}".format(e))
        return False
    return True


def main():
    if len(sys.argv) > 1:
        results = [inspect(arg) for arg in sys.argv[1:]]
        sys.exit(0 if all(results) else 1)
    print(Version.system_info_string())
    while True:
        try:
            line = input("Inspect >>> ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if line in ("exit", "quit"):
            break
        if line:
            inspect(line)


if __name__ == "__main__":
    main()
