#!/usr/bin/env python3
"""
Example script for browsing the Apple Music catalog.
Looks up an album, searches the catalog, prints the top charts and, when a
music user token is configured, lists the first page of library playlists.
"""

import asyncio
import os
import sys
import argparse
import logging

# Add the project root to the path so we can import our modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config.settings import Settings
from asapplemusic import AppleMusicClient, AppleMusicError

def print_error(result, error):
    if error:
        print(f"❌ {error}")

async def run(args):
    settings = Settings()
    settings.validate()

    async with AppleMusicClient(settings=settings, storefront=args.storefront) as client:
        try:
            album = await client.get_album(args.album)
        except AppleMusicError as e:
            print(f"❌ Album lookup failed: {e}")
        else:
            if album:
                print(f"💿 {album.name} by {album.artist_name} ({album.track_count} tracks)")
                if album.artwork:
                    print(f"   Artwork: {album.artwork.url_for(300, 300)}")

        results = await client.search(args.term, limit=3, types=["songs", "artists"], callback=print_error)
        if results:
            print(f"\n🔎 {len(results)} results for {args.term!r}:")
            for item in results.items:
                print(f"  [{item.type}] {getattr(item, 'name', item.id)}")

        charts = await client.get_charts(["songs"], limit=5, callback=print_error)
        if charts and charts.songs:
            print(f"\n📈 {charts.songs[0].name}:")
            for i, song in enumerate(charts.songs[0].data, 1):
                print(f"  {i}. {song.name} - {song.artist_name} ({song.duration_formatted})")

        if settings.APPLE_MUSIC_USER_TOKEN:
            playlists = await client.get_multiple_library_playlists(limit=10, callback=print_error)
            print(f"\n📋 Library playlists:")
            for playlist in playlists or []:
                print(f"  {playlist.name}")

def main():
    parser = argparse.ArgumentParser(description='Browse the Apple Music catalog')
    parser.add_argument('--storefront', type=str, default=None, help='Storefront code, e.g. us')
    parser.add_argument('--album', type=str, default='310730204', help='Catalog album id')
    parser.add_argument('--term', type=str, default='bruce springsteen', help='Search term')
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)
    asyncio.run(run(args))

if __name__ == "__main__":
    main()
