from neatmark.pool.population import IdCounter, Population, PopulationLike

__all__ = ['IdCounter', 'Population', 'PopulationLike']
