"""
Smoke Client for the AutoVoice API.
Exercises the endpoints of a running server.
"""

import asyncio
import os

import httpx

from autovoice.client import AutoVoiceClient
from autovoice.core.exceptions import AutoVoiceException


BASE_URL = os.environ.get("AUTOVOICE_URL", "http://localhost:5000")


async def check_inventory(client: AutoVoiceClient):
    """Browse and search the inventory."""
    print("\n🚗 Checking Inventory Endpoints...")

    cars = await client.list_cars()
    print(f"   /api/cars: {len(cars)} cars")
    for car in cars:
        print(f"   - {car.id}: {car.title} (${car.price:,})")

    electric = await client.search_cars(fuel_type="Electric")
    print(f"   Electric: {[car.id for car in electric]}")

    cheap_hondas = await client.search_cars(make="honda", max_price=30000)
    print(f"   Hondas under $30,000: {[car.id for car in cheap_hondas]}")

    try:
        await client.get_car("car-099")
    except AutoVoiceException as e:
        print(f"   car-099: {e.status_code} {e.message}")


async def check_assistant(client: AutoVoiceClient):
    """Chat with the assistant if it is configured."""
    print("\n💬 Checking Assistant Endpoints...")

    if not await client.is_configured():
        print("   Assistant not configured (set OPENAI_API_KEY), skipping")
        return

    questions = [
        "Do you have any electric cars?",
        "Which one has the longest range?",
    ]

    history = []
    for question in questions:
        print(f"\n   📤 Customer: {question}")
        reply = await client.chat(history, question)
        print(f"   🤖 Assistant: {reply.message[:200]}")
        print(f"   🔊 Audio: {'yes' if reply.audio_url else 'no'}")

    audio = await client.synthesize("Thanks for visiting!")
    print(f"\n   /api/tts: {len(audio)} bytes")


async def main():
    print("=" * 60)
    print("🧪 AutoVoice API Smoke Client")
    print("=" * 60)
    print(f"Target: {BASE_URL}")

    try:
        async with AutoVoiceClient(BASE_URL) as client:
            await check_inventory(client)
            await check_assistant(client)

        print("\n" + "=" * 60)
        print("✅ Smoke run completed!")
        print("=" * 60)

    except AutoVoiceException as e:
        print(f"\n❌ Error: {e.message}")
    except httpx.HTTPError as e:
        print(f"\n❌ HTTP error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
