from __future__ import annotations
from google.protobuf.message import Message
from spotify_uri import util
from spotify_uri.util import Base62
import enum
import functools
import logging
import typing


class SpotifyIdError(Exception):
    """Base class for errors raised while parsing Spotify IDs and URIs"""

    def __eq__(self, other):
        return type(self) is type(other) and self.args == other.args

    def __hash__(self):
        return hash((type(self), self.args))


class InvalidIdSize(SpotifyIdError):
    def __init__(self, expected: int, src: str):
        super().__init__(expected, src)
        self.expected = expected
        self.src = src

    def __str__(self):
        return ("ID '{}' cannot be parsed: wrong identifier size; "
                "expected {} was {}".format(self.src, self.expected,
                                            len(self.src)))


class InvalidIdBytes(SpotifyIdError):
    def __init__(self, src: bytes):
        super().__init__(bytes(src))
        self.src = bytes(src)

    def __str__(self):
        return "ID bytes '{}' cannot be parsed".format(list(self.src))


class InvalidFormat(SpotifyIdError):
    def __init__(self, reason: str, src: str):
        super().__init__(reason, src)
        self.reason = reason
        self.src = src

    def __str__(self):
        return "'{}' is not a valid Spotify URI: {}".format(
            self.src, self.reason)


class InvalidScheme(SpotifyIdError):
    def __init__(self, src: str):
        super().__init__(src)
        self.src = src

    def __str__(self):
        return "URI '{}' does not have the 'spotify' scheme".format(self.src)


@functools.total_ordering
class FileId:
    """20-byte identifier of a file (image, audio or video) on the CDN"""
    SIZE = 20
    __file_id: bytes

    def __init__(self, file_id: bytes):
        if len(file_id) != FileId.SIZE:
            raise InvalidIdBytes(file_id)
        self.__file_id = bytes(file_id)

    @staticmethod
    def from_raw(src: bytes) -> FileId:
        return FileId(src)

    @staticmethod
    def from_image(image: Message) -> FileId:
        return FileId.from_raw(image.file_id)

    @staticmethod
    def from_audio_file(file: Message) -> FileId:
        return FileId.from_raw(file.file_id)

    @staticmethod
    def from_video_file(video: Message) -> FileId:
        return FileId.from_raw(video.file_id)

    def get_raw(self) -> bytes:
        return self.__file_id

    def hex_id(self) -> str:
        return util.bytes_to_hex(self.__file_id)

    def __eq__(self, other):
        if not isinstance(other, FileId):
            return NotImplemented
        return self.__file_id == other.__file_id

    def __lt__(self, other):
        if not isinstance(other, FileId):
            return NotImplemented
        return self.__file_id < other.__file_id

    def __hash__(self):
        return hash(self.__file_id)

    def __repr__(self):
        return "FileId('{}')".format(self.hex_id())

    def __str__(self):
        return self.hex_id()


class SpotifyId:
    """
    A 128-bit identifier for basic Spotify items.

    The same value identifies different things depending on the item type it
    is paired with, see SpotifyItem.
    """
    SIZE = 16
    SIZE_BASE16 = 32
    SIZE_BASE62 = 22
    base62 = Base62.create_instance_with_inverted_character_set()
    __id: int

    def __init__(self, _id: int):
        if not 0 <= _id < 1 << (SpotifyId.SIZE * 8):
            raise ValueError("SpotifyId out of range: {}".format(_id))
        self.__id = _id

    @staticmethod
    def from_hex(src: str) -> SpotifyId:
        """
        Parse a 32 character lowercase hex ID
        Raises:
            InvalidIdSize: src is not 32 characters long
            InvalidFormat: src contains a non-hex or uppercase character
        """
        if len(src) != SpotifyId.SIZE_BASE16:
            raise InvalidIdSize(SpotifyId.SIZE_BASE16, src)
        try:
            gid = util.hex_to_bytes(src)
        except ValueError as e:
            raise InvalidFormat(str(e), src) from e
        return SpotifyId.from_gid(gid)

    @staticmethod
    def from_base62(src: str) -> SpotifyId:
        """
        Parse a 22 character base62 ID such as "5sWHDYs0csV6RS48xBl0tH"
        Raises:
            InvalidIdSize: src is not 22 characters long
            InvalidFormat: bad character or value wider than 128 bits

        The length is counted in characters, not UTF-8 bytes, so a 22
        character string with non-ASCII characters is an InvalidFormat
        rather than an InvalidIdSize.
        """
        if len(src) != SpotifyId.SIZE_BASE62:
            raise InvalidIdSize(SpotifyId.SIZE_BASE62, src)
        try:
            gid = SpotifyId.base62.decode(src.encode(), SpotifyId.SIZE)
        except (Base62.DecodeError, UnicodeEncodeError) as e:
            raise InvalidFormat(str(e), src) from e
        return SpotifyId.from_gid(gid)

    @staticmethod
    def from_gid(src: bytes) -> SpotifyId:
        """
        Create an ID from 16 big-endian bytes
        Raises:
            InvalidIdBytes: src is not 16 bytes long
        """
        if len(src) != SpotifyId.SIZE:
            raise InvalidIdBytes(src)
        return SpotifyId(int.from_bytes(src, "big"))

    @staticmethod
    def from_meta_item(item: Message) -> SpotifyId:
        # Revision of an item's metadata on a playlist, not the item's ID.
        return SpotifyId.from_gid(item.revision)

    @staticmethod
    def from_selected_list_content(playlist: Message) -> SpotifyId:
        # Revision of the playlist, not the playlist's ID.
        return SpotifyId.from_gid(playlist.revision)

    def get_gid(self) -> bytes:
        return self.__id.to_bytes(SpotifyId.SIZE, "big")

    def hex_id(self) -> str:
        return util.bytes_to_hex(self.get_gid())

    def base62_id(self) -> str:
        return SpotifyId.base62.encode(self.get_gid(),
                                       SpotifyId.SIZE_BASE62).decode()

    def __int__(self):
        return self.__id

    def __eq__(self, other):
        if not isinstance(other, SpotifyId):
            return NotImplemented
        return self.__id == other.__id

    def __hash__(self):
        return hash(self.__id)

    def __repr__(self):
        return "SpotifyId('{}')".format(self.base62_id())

    def __str__(self):
        return self.base62_id()


class SpotifyItemType(enum.Enum):
    ALBUM = "album"
    ARTIST = "artist"
    EPISODE = "episode"
    PLAYLIST = "playlist"
    SHOW = "show"
    TRACK = "track"

    @staticmethod
    def try_from(word: str) -> typing.Optional[SpotifyItemType]:
        try:
            return SpotifyItemType(word)
        except ValueError:
            return None

    def __str__(self):
        return self.value


class SpotifyItem:
    """A basic Spotify item: an ID together with the type it identifies"""
    __item_type: SpotifyItemType
    __id: SpotifyId

    def __init__(self, item_type: SpotifyItemType, _id: SpotifyId):
        self.__item_type = item_type
        self.__id = _id

    def item_type(self) -> SpotifyItemType:
        return self.__item_type

    def id(self) -> SpotifyId:
        return self.__id

    def is_playable(self) -> bool:
        """If the item can be played as an individual unit"""
        return self.__item_type in (SpotifyItemType.EPISODE,
                                    SpotifyItemType.TRACK)

    def __eq__(self, other):
        if not isinstance(other, SpotifyItem):
            return NotImplemented
        return (self.__item_type, self.__id) == (other.__item_type,
                                                 other.__id)

    def __hash__(self):
        return hash((self.__item_type, self.__id))

    def __repr__(self):
        return "SpotifyItem({}, {!r})".format(self.__item_type.name,
                                              self.__id)

    def __str__(self):
        return "spotify:{}:{}".format(self.__item_type, self.__id)


class SpotifyMetaItem:
    """
    A Spotify metadata item.

    The only known kind is a page, used to resolve pagination references.
    """
    PAGE_BITS = 64
    __kind: SpotifyMetaItem.Kind
    __index: int

    def __init__(self, kind: SpotifyMetaItem.Kind, index: int):
        self.__kind = kind
        self.__index = index

    @staticmethod
    def page(index: int) -> SpotifyMetaItem:
        if not 0 <= index < 1 << SpotifyMetaItem.PAGE_BITS:
            raise ValueError("Page index out of range: {}".format(index))
        return SpotifyMetaItem(SpotifyMetaItem.Kind.PAGE, index)

    def kind(self) -> SpotifyMetaItem.Kind:
        return self.__kind

    def index(self) -> int:
        return self.__index

    def __eq__(self, other):
        if not isinstance(other, SpotifyMetaItem):
            return NotImplemented
        return (self.__kind, self.__index) == (other.__kind, other.__index)

    def __hash__(self):
        return hash((self.__kind, self.__index))

    def __repr__(self):
        return "SpotifyMetaItem.page({})".format(self.__index)

    def __str__(self):
        return "spotify:meta:{}:{}".format(self.__kind.value, self.__index)

    class Kind(enum.Enum):
        PAGE = "page"


class SpotifyLocalItem:
    """A music track from the user's own filesystem, with basic metadata"""
    DURATION_BITS = 32
    __artist: str
    __album_title: str
    __track_title: str
    __duration_s: int

    def __init__(self, artist: str, album_title: str, track_title: str,
                 duration_s: int):
        if not 0 <= duration_s < 1 << SpotifyLocalItem.DURATION_BITS:
            raise ValueError("Duration out of range: {}".format(duration_s))
        for text in (artist, album_title, track_title):
            # Raises UnicodeEncodeError on lone surrogates.
            text.encode("utf-8")
        self.__artist = artist
        self.__album_title = album_title
        self.__track_title = track_title
        self.__duration_s = duration_s

    def artist(self) -> str:
        return self.__artist

    def album_title(self) -> str:
        return self.__album_title

    def track_title(self) -> str:
        return self.__track_title

    def duration_s(self) -> int:
        return self.__duration_s

    def __key(self):
        return (self.__artist, self.__album_title, self.__track_title,
                self.__duration_s)

    def __eq__(self, other):
        if not isinstance(other, SpotifyLocalItem):
            return NotImplemented
        return self.__key() == other.__key()

    def __hash__(self):
        return hash(self.__key())

    def __repr__(self):
        return "SpotifyLocalItem({!r}, {!r}, {!r}, {})".format(*self.__key())

    def __str__(self):
        return "spotify:local:{}:{}:{}:{}".format(
            util.url_encode(self.__artist),
            util.url_encode(self.__album_title),
            util.url_encode(self.__track_title), self.__duration_s)


class SpotifyUri:
    """
    Any URI with the 'spotify' scheme, e.g. spotify:track:5sWHDYs0csV6RS48xBl0tH

    Parsing yields one of ItemUri, UserItemUri, StationUri, MetaUri, LocalUri
    or UnknownUri. Input that is a well-formed spotify URI but not understood
    here becomes an UnknownUri that formats back to the same text.
    """
    SCHEME = "spotify"
    logger = logging.getLogger("SpotifyUri:SpotifyUri")

    @staticmethod
    def from_uri(src: str) -> SpotifyUri:
        """
        Parse a spotify URI
        Args:
            src: The URI text
        Returns:
            The parsed URI variant
        Raises:
            InvalidScheme: src does not start with "spotify:"
            InvalidFormat: a required part is missing or malformed
            InvalidIdSize: an item ID has the wrong length
        """
        parts = iter(src.split(":"))
        if SpotifyUri._next_part(src, parts) != SpotifyUri.SCHEME:
            raise InvalidScheme(src)
        typ = SpotifyUri._next_part(src, parts)
        if typ == "user":
            user = SpotifyUri._next_part(src, parts)
            uri = SpotifyUri._item_from_parts(
                src, SpotifyUri._next_part(src, parts), parts,
                lambda item: UserItemUri(user, item),
                lambda other, rest: UnknownUri(
                    "user", "{}:{}".format(
                        user, SpotifyUri._join_rest(other, rest))))
        elif typ == "station":
            uri = SpotifyUri._item_from_parts(
                src, SpotifyUri._next_part(src, parts), parts, StationUri,
                lambda other, rest: UnknownUri(
                    "station", SpotifyUri._join_rest(other, rest)))
        elif typ == "meta":
            uri = SpotifyUri._meta_from_parts(src, parts)
        elif typ == "local":
            uri = SpotifyUri._local_from_parts(src, parts)
        else:
            uri = SpotifyUri._item_from_parts(src, typ, parts, ItemUri,
                                              UnknownUri)
        if isinstance(uri, UnknownUri):
            SpotifyUri.logger.debug(
                "Keeping unrecognized URI verbatim: {}".format(src))
        return uri

    @staticmethod
    def track(_id: SpotifyId) -> ItemUri:
        return ItemUri(SpotifyItem(SpotifyItemType.TRACK, _id))

    @staticmethod
    def album(_id: SpotifyId) -> ItemUri:
        return ItemUri(SpotifyItem(SpotifyItemType.ALBUM, _id))

    @staticmethod
    def artist(_id: SpotifyId) -> ItemUri:
        return ItemUri(SpotifyItem(SpotifyItemType.ARTIST, _id))

    @staticmethod
    def episode(_id: SpotifyId) -> ItemUri:
        return ItemUri(SpotifyItem(SpotifyItemType.EPISODE, _id))

    @staticmethod
    def playlist(_id: SpotifyId) -> ItemUri:
        return ItemUri(SpotifyItem(SpotifyItemType.PLAYLIST, _id))

    @staticmethod
    def show(_id: SpotifyId) -> ItemUri:
        return ItemUri(SpotifyItem(SpotifyItemType.SHOW, _id))

    @staticmethod
    def from_album(album: Message) -> ItemUri:
        return SpotifyUri.album(SpotifyId.from_gid(album.gid))

    @staticmethod
    def from_artist(artist: Message) -> ItemUri:
        return SpotifyUri.artist(SpotifyId.from_gid(artist.gid))

    @staticmethod
    def from_artist_with_role(artist: Message) -> ItemUri:
        return SpotifyUri.artist(SpotifyId.from_gid(artist.artist_gid))

    @staticmethod
    def from_episode(episode: Message) -> ItemUri:
        return SpotifyUri.episode(SpotifyId.from_gid(episode.gid))

    @staticmethod
    def from_show(show: Message) -> ItemUri:
        return SpotifyUri.show(SpotifyId.from_gid(show.gid))

    @staticmethod
    def from_track(track: Message) -> ItemUri:
        return SpotifyUri.track(SpotifyId.from_gid(track.gid))

    @staticmethod
    def from_track_ref(track: Message) -> SpotifyUri:
        try:
            return SpotifyUri.track(SpotifyId.from_gid(track.gid))
        except InvalidIdBytes:
            SpotifyUri.logger.debug(
                "Track reference has no usable gid, parsing uri: {}".format(
                    track.uri))
            return SpotifyUri.from_uri(track.uri)

    @staticmethod
    def from_playlist_item(item: Message) -> SpotifyUri:
        return SpotifyUri.from_uri(item.uri)

    @staticmethod
    def from_transcoded_picture(picture: Message) -> SpotifyUri:
        # TODO: check the format of this field in the wild; it might be a
        #  FileId rather than a URI.
        return SpotifyUri.from_uri(picture.uri)

    def item(self) -> typing.Optional[SpotifyItem]:
        """The identified item; a station is a function of an item, not the item"""
        return None

    def id(self) -> typing.Optional[SpotifyId]:
        item = self.item()
        return None if item is None else item.id()

    def item_type(self) -> typing.Optional[SpotifyItemType]:
        item = self.item()
        return None if item is None else item.item_type()

    def username(self) -> typing.Optional[str]:
        return None

    def is_playable(self) -> bool:
        """If the URI can be played as an individual unit"""
        item = self.item()
        return item is not None and item.is_playable()

    def to_spotify_uri(self) -> str:
        raise NotImplementedError

    def _key(self) -> tuple:
        raise NotImplementedError

    def __eq__(self, other):
        if not isinstance(other, SpotifyUri):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self), self._key()))

    def __repr__(self):
        return "{}({})".format(type(self).__name__,
                               ", ".join(repr(k) for k in self._key()))

    def __str__(self):
        return self.to_spotify_uri()

    @staticmethod
    def _next_part(src: str, parts: typing.Iterator[str]) -> str:
        part = next(parts, None)
        if part is None:
            raise InvalidFormat("missing part", src)
        return part

    @staticmethod
    def _rest_from_parts(parts: typing.Iterator[str]) -> typing.Optional[str]:
        rest = list(parts)
        if not rest:
            return None
        return ":".join(rest)

    @staticmethod
    def _join_rest(head: str, rest: typing.Optional[str]) -> str:
        if rest is None:
            return head
        return "{}:{}".format(head, rest)

    @staticmethod
    def _item_from_parts(
        src: str,
        typ: str,
        parts: typing.Iterator[str],
        on_item: typing.Callable[[SpotifyItem], SpotifyUri],
        on_unknown: typing.Callable[[str, typing.Optional[str]], SpotifyUri],
    ) -> SpotifyUri:
        item_type = SpotifyItemType.try_from(typ)
        if item_type is None:
            return on_unknown(typ, SpotifyUri._rest_from_parts(parts))
        id_str = SpotifyUri._next_part(src, parts)
        _id = SpotifyId.from_base62(id_str)
        rest = SpotifyUri._rest_from_parts(parts)
        if rest is not None:
            return on_unknown(typ, SpotifyUri._join_rest(id_str, rest))
        return on_item(SpotifyItem(item_type, _id))

    @staticmethod
    def _meta_from_parts(src: str, parts: typing.Iterator[str]) -> SpotifyUri:
        kind = SpotifyUri._next_part(src, parts)
        if kind != SpotifyMetaItem.Kind.PAGE.value:
            return UnknownUri(
                "meta",
                SpotifyUri._join_rest(kind,
                                      SpotifyUri._rest_from_parts(parts)))
        try:
            index = util.parse_unsigned(SpotifyUri._next_part(src, parts),
                                        SpotifyMetaItem.PAGE_BITS)
        except ValueError as e:
            raise InvalidFormat(str(e), src) from e
        rest = SpotifyUri._rest_from_parts(parts)
        if rest is not None:
            return UnknownUri("meta", "{}:{}:{}".format(kind, index, rest))
        return MetaUri(SpotifyMetaItem.page(index))

    @staticmethod
    def _local_from_parts(src: str,
                          parts: typing.Iterator[str]) -> SpotifyUri:
        fields = [SpotifyUri._next_part(src, parts) for _ in range(4)]
        rest = SpotifyUri._rest_from_parts(parts)
        if rest is not None:
            return UnknownUri("local",
                              SpotifyUri._join_rest(":".join(fields), rest))
        artist, album_title, track_title, duration_s = fields
        try:
            return LocalUri(
                SpotifyLocalItem(
                    util.url_decode(artist), util.url_decode(album_title),
                    util.url_decode(track_title),
                    util.parse_unsigned(duration_s,
                                        SpotifyLocalItem.DURATION_BITS)))
        except ValueError as e:
            raise InvalidFormat(str(e), src) from e


class ItemUri(SpotifyUri):
    __item: SpotifyItem

    def __init__(self, item: SpotifyItem):
        self.__item = item

    def item(self) -> SpotifyItem:
        return self.__item

    def to_spotify_uri(self) -> str:
        return str(self.__item)

    def _key(self) -> tuple:
        return (self.__item, )


class UserItemUri(SpotifyUri):
    __username: str
    __item: SpotifyItem

    def __init__(self, username: str, item: SpotifyItem):
        self.__username = username
        self.__item = item

    def item(self) -> SpotifyItem:
        return self.__item

    def username(self) -> str:
        return self.__username

    def to_spotify_uri(self) -> str:
        return "spotify:user:{}:{}:{}".format(self.__username,
                                              self.__item.item_type(),
                                              self.__item.id())

    def _key(self) -> tuple:
        return self.__username, self.__item


class StationUri(SpotifyUri):
    """Recommendations seeded from an item, not the item itself"""
    __seed: SpotifyItem

    def __init__(self, seed: SpotifyItem):
        self.__seed = seed

    def seed(self) -> SpotifyItem:
        return self.__seed

    def to_spotify_uri(self) -> str:
        return "spotify:station:{}:{}".format(self.__seed.item_type(),
                                              self.__seed.id())

    def _key(self) -> tuple:
        return (self.__seed, )


class MetaUri(SpotifyUri):
    __meta: SpotifyMetaItem

    def __init__(self, meta: SpotifyMetaItem):
        self.__meta = meta

    def meta(self) -> SpotifyMetaItem:
        return self.__meta

    def to_spotify_uri(self) -> str:
        return str(self.__meta)

    def _key(self) -> tuple:
        return (self.__meta, )


class LocalUri(SpotifyUri):
    __local: SpotifyLocalItem

    def __init__(self, local: SpotifyLocalItem):
        self.__local = local

    def local(self) -> SpotifyLocalItem:
        return self.__local

    def to_spotify_uri(self) -> str:
        return str(self.__local)

    def _key(self) -> tuple:
        return (self.__local, )


class UnknownUri(SpotifyUri):
    """
    A spotify URI that is not understood; formats back to the original text.

    rest is None when nothing followed the type word and "" when a trailing
    ':' did.
    """
    __typ: str
    __rest: typing.Optional[str]

    def __init__(self, typ: str, rest: typing.Optional[str] = None):
        self.__typ = typ
        self.__rest = rest

    def typ(self) -> str:
        return self.__typ

    def rest(self) -> typing.Optional[str]:
        return self.__rest

    def to_spotify_uri(self) -> str:
        if self.__rest is None:
            return "spotify:{}".format(self.__typ)
        return "spotify:{}:{}".format(self.__typ, self.__rest)

    def _key(self) -> tuple:
        return self.__typ, self.__rest
