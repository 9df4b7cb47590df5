"""Run a Postbox instance: `python -m postbox --port=8787 --database=postbox.db`.
"""
import asyncio
import logging

from tornado.options import define, options, parse_command_line

from . import Postbox

define("database", default="postbox.db", help="UnQLite database path, or :mem:")
define("address", default="127.0.0.1", help="address to bind the HTTP API gate")
define("port", default=8787, type=int, help="port to bind the HTTP API gate")
define("debug", default=False, type=bool, help="enable tornado debug mode")


async def main() -> None:
    parse_command_line()
    postbox = Postbox(
        database_path=options.database,
        http_binds=[(options.address, options.port)],
        debug=options.debug,
    )
    await postbox.start()
    logging.getLogger("postbox").info(
        "listening on {}:{}".format(options.address, options.port)
    )
    try:
        await asyncio.Event().wait()
    finally:
        await postbox.stop()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
