from arena.models import Projectile, ProjectileList
from arena.services.world.projectiles import advance


def test_advance_empty_list(world_config):
    plist = ProjectileList(remove_number=3)
    assert advance(plist, world_config) == 0
    assert plist.projectiles == []
    assert plist.remove_number == 0


def test_projectiles_age_and_expire(world_config):
    plist = ProjectileList(projectiles=[Projectile({'n': 1}), Projectile({'n': 2}, age=3)])
    assert advance(plist, world_config) == 0
    assert [p.age for p in plist.projectiles] == [1, 4]

    # second one reaches the lifetime of 5
    assert advance(plist, world_config) == 1
    assert plist.remove_number == 1
    assert [p.payload['n'] for p in plist.projectiles] == [1]


def test_off_world_projectiles_are_removed(world_config):
    plist = ProjectileList(projectiles=[
        Projectile({'X_pos': 50, 'Y_pos': 50}),
        Projectile({'X_pos': 150, 'Y_pos': 50}),
        Projectile({'X_pos': 50, 'Y_pos': -1}),
        Projectile({'X_pos': 'far', 'Y_pos': None}),
    ])
    assert advance(plist, world_config) == 2
    assert [p.payload['X_pos'] for p in plist.projectiles] == [50, 'far']


def test_remove_number_never_exceeds_count(world_config):
    plist = ProjectileList(projectiles=[Projectile({}, age=10) for _ in range(4)])
    before = len(plist.projectiles)
    removed = advance(plist, world_config)
    assert removed == before == 4
    assert plist.projectiles == []
