# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""streamscout - find well-rated movies and shows on your streaming services."""

from streamscout.__about__ import __version__

__all__ = ["__version__"]
