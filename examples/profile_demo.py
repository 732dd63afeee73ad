"""
Demo script showing how request profiles are merged and compared.

This demonstrates, without any network access:
- Loading an xreq document
- Applying command-line style overrides
- Previewing the final URL
- Reducing and diffing two responses
"""

from pathlib import Path

from xdiff import (
    OverrideSet,
    RequestConfig,
    diff_text,
    reduce_response,
)
from xdiff.core.models import HTTPResponse

FIXTURES = Path(__file__).parent.parent / "fixtures"


def demo_merge():
    """Demonstrate override merging and URL preview."""
    print("=" * 60)
    print("Demo 1: Merging a profile with overrides")
    print("=" * 60)

    config = RequestConfig.load_yaml(FIXTURES / "xreq_test.yaml")
    profile = config.get_profile("todo")

    overrides = OverrideSet.from_tokens(["a=2", "page=3", "@completed=true"])
    merged = profile.merge(overrides)

    print(f"\nUrl:          {profile.get_url(overrides)}")
    print(f"Content-Type: {merged.content_type}")
    print(f"Body:         {merged.body}")

    form = profile.merge(
        OverrideSet.from_tokens(["%Content-Type=application/x-www-form-urlencoded"])
    )
    print(f"Form body:    {form.body}")


def demo_diff():
    """Demonstrate response reduction and diffing."""
    print("\n" + "=" * 60)
    print("Demo 2: Diffing two responses")
    print("=" * 60 + "\n")

    def response(title: str) -> HTTPResponse:
        return HTTPResponse(
            status_code=200,
            reason="OK",
            headers=[("content-type", "application/json"), ("date", title)],
            text=f'{{"id": 1, "title": "{title}", "meta": {{"id": 7}}}}',
        )

    text1 = reduce_response(response("todo"), skip_headers=["date"], skip_body=["id"])
    text2 = reduce_response(response("done"), skip_headers=["date"], skip_body=["id"])

    print(diff_text(text1, text2, color=True))


if __name__ == "__main__":
    demo_merge()
    demo_diff()
