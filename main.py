"""Development entrypoint.

Exposes ``app`` for ``flask --app main run`` and runs the dev server when
executed directly.
"""

import os

from raffle_admin import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=int(os.getenv("PORT", "3000")), debug=False)
