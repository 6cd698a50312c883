from app.schemas.player import Player

HOME_GROWN_BONUS = 0.5
WATCH_LIST_BONUS = 0.3
EXPERIENCE_BONUS_CAP = 0.5


def rate_player(player: Player) -> float:
    """Balancing weight: scout recommendation plus status and experience bonuses (total is not clamped)."""
    rating = float(player.scout_recommendation or 0.0)
    if "HG" in player.status:
        rating += HOME_GROWN_BONUS
    if "Player To Watch" in player.status:
        rating += WATCH_LIST_BONUS
    if player.experience:
        rating += min(player.experience / 10, EXPERIENCE_BONUS_CAP)
    return rating
