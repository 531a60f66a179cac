import json
import time

import badgerblog


def main() -> None:
    client = badgerblog.run(port=57794)
    if isinstance(client, badgerblog.BadgerBlogServer):
        client = client.as_client()

    print("adapters:", ", ".join(client.list_adapters()))
    print(json.dumps(client.form_rules("comment")["confirm_email"]["attributes"], indent=2))

    result = client.validate(
        "comment",
        {
            "author": "Reader",
            "email": "ayende@example.com",
            "confirm_email": "someone-else@example.com",
            "body": "Nice post.",
        },
    )
    print(json.dumps(result, indent=2))

    try:
        while True:
            time.sleep(3600)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
