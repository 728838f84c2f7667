"""IRC command and numeric reply identifiers.

Each member's value is the identifier as it appears on the wire. Most of these
are never acted on by the client but are recognised so received lines get a
meaningful type. Descriptions follow RFC 2812.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class MessageType(Enum):
    # client commands
    ADMIN = "ADMIN"  # Get information about the administrator of a server.
    AWAY = "AWAY"  # Set an automatic reply string for any PRIVMSG commands.
    CAP = "CAP"  # Capability negotiation.
    CONNECT = "CONNECT"  # Request a new connection to another server immediately.
    DIE = "DIE"  # Shutdown the server.
    ERROR = "ERROR"  # Report a serious or fatal error to a peer.
    INFO = "INFO"  # Get information describing a server.
    INVITE = "INVITE"  # Invite a user to a channel.
    ISON = "ISON"  # Determine if a nickname is currently on IRC.
    JOIN = "JOIN"  # Join a channel.
    KICK = "KICK"  # Request the forced removal of a user from a channel.
    KILL = "KILL"  # Close a client-server connection.
    LINKS = "LINKS"  # List all servernames known by the answering server.
    LIST = "LIST"  # List channels and their topics.
    LUSERS = "LUSERS"  # Get statistics about the size of the IRC network.
    MODE = "MODE"  # User or channel mode.
    MOTD = "MOTD"  # Get the Message of the Day.
    NAMES = "NAMES"  # List all visible nicknames.
    NICK = "NICK"  # Define a nickname.
    NJOIN = "NJOIN"  # Exchange channel member lists between servers.
    NOTICE = "NOTICE"  # Like PRIVMSG, but automatic replies must never be sent.
    OPER = "OPER"  # Obtain operator privileges.
    PART = "PART"  # Leave a channel.
    PASS = "PASS"  # Set a connection password.
    PING = "PING"  # Test for the presence of an active client or server.
    PONG = "PONG"  # Reply to a PING message.
    PRIVMSG = "PRIVMSG"  # Private messages between users, and messages to channels.
    QUIT = "QUIT"  # Terminate the client session.
    REHASH = "REHASH"  # Force the server to re-read its configuration file.
    RESTART = "RESTART"  # Force the server to restart itself.
    SERVER = "SERVER"  # Register a new server.
    SERVICE = "SERVICE"  # Register a new service.
    SERVLIST = "SERVLIST"  # List services currently connected to the network.
    SQUERY = "SQUERY"  # Send a message to a service.
    SQUIT = "SQUIT"  # Break a local or remote server link.
    STATS = "STATS"  # Get server statistics.
    SUMMON = "SUMMON"  # Ask a user to join IRC.
    TIME = "TIME"  # Get the local time from the specified server.
    TOPIC = "TOPIC"  # Change or view the topic of a channel.
    TRACE = "TRACE"  # Find the route to a server.
    USER = "USER"  # Specify the username, hostname and realname of a new user.
    USERHOST = "USERHOST"  # Get information about up to 5 nicknames.
    USERS = "USERS"  # Get a list of users logged into the server.
    VERSION = "VERSION"  # Get the version of the server program.
    WALLOPS = "WALLOPS"  # Message users with the 'w' user mode.
    WHO = "WHO"  # List a set of users.
    WHOIS = "WHOIS"  # Get information about a specific user.
    WHOWAS = "WHOWAS"  # Get information about a nickname which no longer exists.

    # connection registration replies
    RPL_WELCOME = "001"
    RPL_YOURHOST = "002"
    RPL_CREATED = "003"
    RPL_MYINFO = "004"
    RPL_BOUNCE = "005"

    # command replies
    RPL_TRACELINK = "200"
    RPL_TRACECONNECTING = "201"
    RPL_TRACEHANDSHAKE = "202"
    RPL_TRACEUNKNOWN = "203"
    RPL_TRACEOPERATOR = "204"
    RPL_TRACEUSER = "205"
    RPL_TRACESERVER = "206"
    RPL_TRACESERVICE = "207"
    RPL_TRACENEWTYPE = "208"
    RPL_TRACECLASS = "209"
    RPL_TRACERECONNECT = "210"
    RPL_STATSLINKINFO = "211"
    RPL_STATSCOMMANDS = "212"
    RPL_ENDOFSTATS = "219"
    RPL_UMODEIS = "221"
    RPL_SERVLIST = "234"
    RPL_SERVLISTEND = "235"
    RPL_STATSUPTIME = "242"
    RPL_STATSOLINE = "243"
    RPL_LUSERCLIENT = "251"
    RPL_LUSEROP = "252"
    RPL_LUSERUNKNOWN = "253"
    RPL_LUSERCHANNELS = "254"
    RPL_LUSERME = "255"
    RPL_ADMINME = "256"
    RPL_ADMINLOC1 = "257"
    RPL_ADMINLOC2 = "258"
    RPL_ADMINEMAIL = "259"
    RPL_TRACELOG = "261"
    RPL_TRACEEND = "262"
    RPL_TRYAGAIN = "263"
    RPL_AWAY = "301"
    RPL_USERHOST = "302"
    RPL_ISON = "303"
    RPL_UNAWAY = "305"
    RPL_NOWAWAY = "306"
    RPL_WHOISUSER = "311"
    RPL_WHOISSERVER = "312"
    RPL_WHOISOPERATOR = "313"
    RPL_WHOWASUSER = "314"
    RPL_ENDOFWHO = "315"
    RPL_WHOISIDLE = "317"
    RPL_ENDOFWHOIS = "318"
    RPL_WHOISCHANNELS = "319"
    RPL_LISTSTART = "321"
    RPL_LIST = "322"
    RPL_LISTEND = "323"
    RPL_CHANNELMODEIS = "324"
    RPL_UNIQOPIS = "325"
    RPL_NOTOPIC = "331"
    RPL_TOPIC = "332"
    RPL_INVITING = "341"
    RPL_SUMMONING = "342"
    RPL_INVITELIST = "346"
    RPL_ENDOFINVITELIST = "347"
    RPL_EXCEPTLIST = "348"
    RPL_ENDOFEXCEPTLIST = "349"
    RPL_VERSION = "351"
    RPL_WHOREPLY = "352"
    RPL_NAMREPLY = "353"
    RPL_LINKS = "364"
    RPL_ENDOFLINKS = "365"
    RPL_ENDOFNAMES = "366"
    RPL_BANLIST = "367"
    RPL_ENDOFBANLIST = "368"
    RPL_ENDOFWHOWAS = "369"
    RPL_INFO = "371"
    RPL_MOTD = "372"
    RPL_ENDOFINFO = "374"
    RPL_MOTDSTART = "375"
    RPL_ENDOFMOTD = "376"
    RPL_YOUREOPER = "381"
    RPL_REHASHING = "382"
    RPL_YOURESERVICE = "383"
    RPL_TIME = "391"
    RPL_USERSSTART = "392"
    RPL_USERS = "393"
    RPL_ENDOFUSERS = "394"
    RPL_NOUSERS = "395"

    # error replies
    ERR_NOSUCHNICK = "401"
    ERR_NOSUCHSERVER = "402"
    ERR_NOSUCHCHANNEL = "403"
    ERR_CANNOTSENDTOCHAN = "404"
    ERR_TOOMANYCHANNELS = "405"
    ERR_WASNOSUCHNICK = "406"
    ERR_TOOMANYTARGETS = "407"
    ERR_NOSUCHSERVICE = "408"
    ERR_NOORIGIN = "409"
    ERR_NORECIPIENT = "411"
    ERR_NOTEXTTOSEND = "412"
    ERR_NOTOPLEVEL = "413"
    ERR_WILDTOPLEVEL = "414"
    ERR_BADMASK = "415"
    ERR_UNKNOWNCOMMAND = "421"
    ERR_NOMOTD = "422"
    ERR_NOADMININFO = "423"
    ERR_FILEERROR = "424"
    ERR_NONICKNAMEGIVEN = "431"
    ERR_ERRONEUSNICKNAME = "432"
    ERR_NICKNAMEINUSE = "433"
    ERR_NICKCOLLISION = "436"
    ERR_UNAVAILRESOURCE = "437"
    ERR_USERNOTINCHANNEL = "441"
    ERR_NOTONCHANNEL = "442"
    ERR_USERONCHANNEL = "443"
    ERR_NOLOGIN = "444"
    ERR_SUMMONDISABLED = "445"
    ERR_USERSDISABLED = "446"
    ERR_NOTREGISTERED = "451"
    ERR_NEEDMOREPARAMS = "461"
    ERR_ALREADYREGISTRED = "462"
    ERR_NOPERMFORHOST = "463"
    ERR_PASSWDMISMATCH = "464"
    ERR_YOUREBANNEDCREEP = "465"
    ERR_YOUWILLBEBANNED = "466"
    ERR_KEYSET = "467"
    ERR_CHANNELISFULL = "471"
    ERR_UNKNOWNMODE = "472"
    ERR_INVITEONLYCHAN = "473"
    ERR_BANNEDFROMCHAN = "474"
    ERR_BADCHANNELKEY = "475"
    ERR_BADCHANMASK = "476"
    ERR_NOCHANMODES = "477"
    ERR_BANLISTFULL = "478"
    ERR_NOPRIVILEGES = "481"
    ERR_CHANOPRIVSNEEDED = "482"
    ERR_CANTKILLSERVER = "483"
    ERR_RESTRICTED = "484"
    ERR_UNIQOPPRIVSNEEDED = "485"
    ERR_NOOPERHOST = "491"
    ERR_UMODEUNKNOWNFLAG = "501"
    ERR_USERSDONTMATCH = "502"

    # not part of the protocol: lines we could not classify
    UNKNOWN_COMMAND_ID = "?"
    MALFORMED = "!"

    @property
    def wire_id(self) -> str:
        return self.value

    @property
    def is_sentinel(self) -> bool:
        return self in (MessageType.UNKNOWN_COMMAND_ID, MessageType.MALFORMED)


_ID_TO_TYPE: MappingProxyType[str, MessageType] = MappingProxyType(
    {member.value: member for member in MessageType}
)


def type_for_id(wire_id: str | None) -> MessageType:
    """Resolve a wire identifier, never failing.

    Numerics are registered in their three-digit wire form. Short numeric
    tokens are also accepted and zero-padded before the lookup, so ``"1"``
    and ``"001"`` both give ``RPL_WELCOME``. Anything unrecognised maps to
    ``UNKNOWN_COMMAND_ID``.
    """
    token = wire_id or ""
    found = _ID_TO_TYPE.get(token)
    if found is None and token.isdigit() and len(token) < 3:
        found = _ID_TO_TYPE.get(token.zfill(3))
    return found or MessageType.UNKNOWN_COMMAND_ID


__all__ = ["MessageType", "type_for_id"]
