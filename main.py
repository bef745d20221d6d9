from rich.pretty import pprint

from parley import *

commands = registry(prefix="!")
commands.add(
    {
        "name": "ban",
        "alias": "b",
        "args": ["member", {"name": "reason", "kind": "content"}],
        "flags": [{"name": "days", "kind": "list"}, {"name": "silent", "kind": "boolean"}],
    },
    {
        "name": "ban",
        "args": [{"name": "members", "kind": "list"}],
    },
)


if __name__ == '__main__':
    pprint(commands)
    for match in commands.match('!b @spam --silent --days 1,7 "posting links" again') or ():
        pprint(match)
        match.enforce(shell=True, fancy=True, colorful=True, deferred=True)
