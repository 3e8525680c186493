def global_key(name: str) -> str:
    return f"counter:{name}"

def user_key(name: str, user_id: str) -> str:
    return f"user:{user_id}:{name}"

def leaderboard_key(name: str) -> str:
    return f"zset:{name}"
