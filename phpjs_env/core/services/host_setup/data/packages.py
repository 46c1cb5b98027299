"""
L0 Data — Package lists installed by the host procedure.

Order is kept as apt receives it; apt itself does not care.
"""

from __future__ import annotations

ESSENTIAL_PACKAGES: tuple[str, ...] = (
    "ca-certificates",
    "curl",
    "git",
    "gnupg2",
    "jq",
    "zip",
)

PHP_PACKAGES: tuple[str, ...] = (
    "php",
    "php-bcmath",
    "php-calendar",
    "php-cli",
    "php-common",
    "php-ctype",
    "php-curl",
    "php-dom",
    "php-exif",
    "php-fileinfo",
    "php-ftp",
    "php-gd",
    "php-gmp",
    "php-iconv",
    "php-intl",
    "php-ldap",
    "php-mbstring",
    "php-mysqli",
    "php-mysqlnd",
    "php-opcache",
    "php-pdo",
    "php-pgsql",
    "php-posix",
    "php-readline",
    "php-simplexml",
    "php-soap",
    "php-sockets",
    "php-sqlite3",
    "php-sysvsem",
    "php-tokenizer",
    "php-xml",
    "php-xmlreader",
    "php-xmlwriter",
    "php-zip",
)
