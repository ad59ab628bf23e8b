import json
from dataclasses import dataclass

from rich.pretty import pprint

from optional import *


@dataclass
class Profile:
    id: int
    nickname: Optional[str]


if __name__ == '__main__':
    profile = Profile(7, loads(" null ", str))
    pprint(profile)
    profile.nickname.unmarshal('"eiko"')
    pprint(json.dumps(profile, cls=OptionalEncoder))
    pprint(loads('{"id": 8, "nickname": null}', Profile))
