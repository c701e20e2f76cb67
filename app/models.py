from app import db
from app.constants import AUCTION_STATE_KEY, DEFAULT_TEAM_COLOR
from app.utils import get_local_time


class TeamRecord(db.Model):
    """Team as saved by the setup screens"""
    __tablename__ = 'teams'

    id = db.Column(db.String(64), primary_key=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    name = db.Column(db.String(100), nullable=False, index=True)
    color = db.Column(db.String(20), default=DEFAULT_TEAM_COLOR)
    budget = db.Column(db.Float, nullable=False, default=0)
    remaining_budget = db.Column(db.Float, nullable=False, default=0)
    players = db.Column(db.JSON, nullable=False, default=list)  # roster snapshots
    updated_at = db.Column(db.DateTime, default=get_local_time, onupdate=get_local_time)

    def __repr__(self):
        return f'<TeamRecord {self.name}>'


class PlayerRecord(db.Model):
    """Player in the auction pool"""
    __tablename__ = 'players'

    id = db.Column(db.String(64), primary_key=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    name = db.Column(db.String(100), nullable=False, index=True)
    base_price = db.Column(db.Float, nullable=False, default=0)
    category = db.Column(db.String(50), index=True)
    role = db.Column(db.String(50))
    intro = db.Column(db.Text)
    photo_ref = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default='available', index=True)
    current_price = db.Column(db.Float, nullable=True)
    team_id = db.Column(db.String(64), nullable=True, index=True)
    updated_at = db.Column(db.DateTime, default=get_local_time, onupdate=get_local_time)

    def __repr__(self):
        return f'<PlayerRecord {self.name}>'


class AuctionStateRecord(db.Model):
    """Saved auction snapshot; a single row keyed 'current'"""
    __tablename__ = 'auction_state'

    id = db.Column(db.String(20), primary_key=True, default=AUCTION_STATE_KEY)
    current_player_index = db.Column(db.Integer, nullable=False, default=0)
    auction_started = db.Column(db.Boolean, nullable=False, default=False)
    auction_completed = db.Column(db.Boolean, nullable=False, default=False)
    teams = db.Column(db.JSON, nullable=False, default=list)
    players = db.Column(db.JSON, nullable=False, default=list)
    history = db.Column(db.JSON, nullable=False, default=list)
    updated_at = db.Column(db.DateTime, default=get_local_time, onupdate=get_local_time)

    def __repr__(self):
        return f'<AuctionStateRecord started={self.auction_started}>'
