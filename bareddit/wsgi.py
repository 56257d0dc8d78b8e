# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Process entry point: ``gunicorn bareddit.wsgi:app`` or ``python -m bareddit.wsgi``."""

import os

from bareddit.app import create_app
from bareddit.container import Container
from bareddit.shared.config import load_config

container = Container(load_config())
app = create_app(container)


if __name__ == "__main__":
    app.run(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "4000")),
        debug=not container.config.is_production(),
    )
