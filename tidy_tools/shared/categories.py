"""
Default extension categories.

The organizer never reads this table implicitly: callers build a lookup with
build_extension_table() and pass it to the organization strategy.
"""

from typing import Dict, Mapping, Sequence

DEFAULT_CATEGORIES: Dict[str, Sequence[str]] = {
    "Images": (
        "jpg", "jpeg", "png", "gif", "webp", "bmp", "tiff", "tif", "svg", "heic",
        "heif", "ico", "raw", "cr2", "nef", "orf", "arw", "psb", "dds", "hdr", "jp2",
    ),
    "Videos": (
        "mp4", "mov", "avi", "mkv", "wmv", "flv", "mpeg", "mpg", "m4v", "3gp",
        "webm", "vob", "ts", "m2ts", "rm", "rmvb", "asf",
    ),
    "Audio": (
        "mp3", "wav", "aac", "flac", "ogg", "m4a", "wma", "alac", "aiff", "amr",
        "mid", "midi", "opus", "pcm",
    ),
    "Documents": (
        "doc", "docx", "pdf", "txt", "rtf", "odt", "md", "epub", "tex", "ps",
        "pages", "djvu", "fodt", "rtfd",
    ),
    "Spreadsheets": ("xls", "xlsx", "csv", "ods", "tsv", "xlsm", "xlsb", "numbers"),
    "Presentations": ("ppt", "pptx", "odp", "key", "pps", "ppsx"),
    "Archives": (
        "zip", "tar", "tar.gz", "tgz", "rar", "7z", "xz", "iso", "bz2", "gz", "lz",
        "lzma", "cab", "zst", "arj",
    ),
    "Executables": (
        "exe", "msi", "bat", "cmd", "apk", "aab", "ipa", "dmg", "pkg", "app", "deb",
        "rpm", "flatpak", "snap", "jar", "war", "bin", "sh",
    ),
    "Web": ("html", "htm", "css", "js", "ts", "jsx", "tsx"),
    "Data": ("json", "xml", "yaml", "yml", "ini", "toml", "ndjson"),
    "Code": (
        "c", "h", "cpp", "hpp", "cs", "java", "kt", "py", "rb", "php", "go", "rs",
        "swift", "scala", "lua", "pl", "ps1", "sql", "r", "m", "asm", "dart",
    ),
    "Design": (
        "psd", "psb", "ai", "eps", "indd", "xd", "fig", "sketch", "cdr",
        "afdesign", "afphoto", "afpub",
    ),
    "Fonts": ("ttf", "otf", "woff", "woff2", "eot", "fon", "pfb", "pfa"),
    "3D": (
        "blend", "fbx", "obj", "stl", "3ds", "dae", "ply", "glb", "gltf", "max",
        "usd", "usdz",
    ),
    "CAD": (
        "dwg", "dxf", "dwt", "stp", "step", "iges", "igs", "sldprt", "sldasm",
        "ipt", "iam",
    ),
    "Config": ("log", "cfg", "conf", "env", "editorconfig", "properties", "jsonc", "reg"),
    "Database": (
        "db", "sqlite", "sqlite3", "mdb", "accdb", "dbf", "parquet", "feather",
        "hdf5", "h5",
    ),
    "Backup": ("bak", "tmp", "old", "backup", "swp", "swo"),
}


def build_extension_table(
    categories: Mapping[str, Sequence[str]] = DEFAULT_CATEGORIES,
) -> Dict[str, str]:
    """
    Invert a category -> extensions mapping into an extension -> category lookup.

    Extensions are lowercased. When an extension is listed under more than
    one category (psb, ts) the first category wins.
    """
    table: Dict[str, str] = {}
    for category, extensions in categories.items():
        for ext in extensions:
            table.setdefault(ext.lower().lstrip("."), category)
    return table
