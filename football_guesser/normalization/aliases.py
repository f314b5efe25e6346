# football_guesser/normalization/aliases.py
from types import MappingProxyType
from typing import Mapping

# Canonical name (as produced by normalize_team_name from football-data.org
# names) -> the name TheSportsDB indexes the team under.
TEAM_SEARCH_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        # Premier League
        "Tottenham Hotspur": "Tottenham",
        "Wolverhampton Wanderers": "Wolves",
        "Brighton & Hove Albion": "Brighton",
        "AFC Bournemouth": "Bournemouth",
        "Manchester United": "Man United",
        "Manchester City": "Man City",
        "Nottingham Forest": "Nottingham",
        "West Ham United": "West Ham",
        "Newcastle United": "Newcastle",
        "Leicester City": "Leicester",
        "Ipswich Town": "Ipswich",
        # La Liga
        "Club Atlético de Madrid": "Atletico Madrid",
        "Athletic Club": "Athletic Bilbao",
        "Real Betis Balompié": "Real Betis",
        "RCD Espanyol de Barcelona": "Espanyol",
        "Deportivo Alavés": "Alaves",
        "Rayo Vallecano de Madrid": "Rayo Vallecano",
        "RC Celta de Vigo": "Celta Vigo",
        "Real Sociedad de Fútbol": "Real Sociedad",
        "CA Osasuna": "Osasuna",
        "CD Leganés": "Leganes",
        "RCD Mallorca": "Mallorca",
        "Real Valladolid": "Valladolid",
        # Serie A
        "FC Internazionale Milano": "Inter Milan",
        "SSC Napoli": "Napoli",
        "AS Roma": "Roma",
        "SS Lazio": "Lazio",
        "Atalanta BC": "Atalanta",
        "ACF Fiorentina": "Fiorentina",
        "US Lecce": "Lecce",
        # Bundesliga
        "FC Bayern München": "Bayern Munich",
        "Bayer 04 Leverkusen": "Bayer Leverkusen",
        "Borussia Mönchengladbach": "Monchengladbach",
        "TSG 1899 Hoffenheim": "Hoffenheim",
        "1. FC Union Berlin": "Union Berlin",
        "1. FC Heidenheim 1846": "Heidenheim",
        "1. FSV Mainz 05": "Mainz",
        "SV Werder Bremen": "Werder Bremen",
        "FC St. Pauli 1910": "St Pauli",
        # Ligue 1
        "Paris Saint-Germain": "Paris SG",
        "Olympique de Marseille": "Marseille",
        "Olympique Lyonnais": "Lyon",
        "AS Monaco": "Monaco",
        "Stade Rennais FC 1901": "Rennes",
        "Lille OSC": "Lille",
        "OGC Nice": "Nice",
        "Racing Club de Lens": "Lens",
        "Stade Brestois 29": "Brest",
        "AJ Auxerre": "Auxerre",
        "Le Havre AC": "Le Havre",
    }
)
