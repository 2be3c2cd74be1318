# sdk/protection.py
import requests
import httpx
from rich import print

class ProtectionClient:
    def __init__(self, base_url: str = "http://localhost:3000", timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout

    def health(self):
        r = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Quote only, no Shopify call
    def quote(self, subtotal: float):
        r = self.session.get(f"{self.base_url}/protection/price", params={"subtotal": subtotal}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Push the protection price for this subtotal to Shopify
    def update(self, subtotal: float):
        r = self.session.post(f"{self.base_url}/protection/update", json={"subtotal": subtotal}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async update; returns the raw response so callers can inspect 400/500
    async def update_async(self, subtotal: float):
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(f"{self.base_url}/protection/update", json={"subtotal": subtotal})
            return r


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Protection price client")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000", help="Service base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("health", help="Ping the service")

    q = subparsers.add_parser("quote", help="Get the protection price for a subtotal")
    q.add_argument("--subtotal", type=float, required=True, help="Order subtotal")

    u = subparsers.add_parser("update", help="Update the Shopify protection variant price")
    u.add_argument("--subtotal", type=float, required=True, help="Order subtotal")

    args = parser.parse_args()
    c = ProtectionClient(base_url=args.base_url)

    if args.command == "health":
        print(c.health())
    elif args.command == "quote":
        print(c.quote(args.subtotal))
    elif args.command == "update":
        print(c.update(args.subtotal))
