from karaoke_lyrics.cli import main

main()
