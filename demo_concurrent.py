import asyncio
import time
from sdk.protection import ProtectionClient

async def simulate_update(client, name, subtotal):
    start = time.perf_counter()
    try:
        r = await client.update_async(subtotal)
    except Exception as e:
        print(f"❌ {name} request failed: {e}")
        return

    elapsed = time.perf_counter() - start
    body = r.json()
    if r.status_code == 200:
        print(f"✅ {name} subtotal ${subtotal:.2f} -> committed price ${body['price']:.2f} ({elapsed:.2f}s)")
    elif r.status_code == 400:
        print(f"⚠️  {name} rejected: {body.get('error')}")
    else:
        print(f"❌ {name} update failed ({r.status_code}): {body.get('error')} ({elapsed:.2f}s)")

async def main():
    c = ProtectionClient(base_url="http://127.0.0.1:3000")

    print("🩺 Health:", c.health())

    subtotals = [50, 150, 1000, 99.99, 250]
    for s in subtotals:
        print(f"💲 Quote for ${s:.2f}:", c.quote(s))

    # Every update targets the same variant, so the server runs them one at a time
    print("\n⚡ Simulating concurrent price updates...")
    await asyncio.gather(*[
        simulate_update(c, f"caller-{i}", s) for i, s in enumerate(subtotals, start=1)
    ])

if __name__ == "__main__":
    asyncio.run(main())
